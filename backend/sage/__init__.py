"""Sage: retrieval-augmented assistant backend"""
