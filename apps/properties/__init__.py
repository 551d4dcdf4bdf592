"""Properties app package.

This app holds the house listing model whose owner and monthly price the
booking engine reads.
"""
