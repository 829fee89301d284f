"""Embedding and document ingestion"""
