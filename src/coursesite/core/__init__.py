"""
Core functionality of coursesite: links, content, rendering and progress display.
"""
