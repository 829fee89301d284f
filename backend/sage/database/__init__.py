"""Knowledge store"""
