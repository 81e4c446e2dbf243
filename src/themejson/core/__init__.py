"""
theme.json engine: migration, sanitization, merging and CSS compilation.
"""
