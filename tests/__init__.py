"""
Semantic Categorizer - Test Suite

Test modules organized by functionality:
- unit/ - Dictionary loader, frequency builder, categorizer, reporting, config tests
- test_pipeline.py - End-to-end pipeline and CLI tests
"""
