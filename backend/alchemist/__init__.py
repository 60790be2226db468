"""
Lesson Alchemist backend.

Turns an academic topic into illustrated, narrated interactive modules
using hosted Gemini models.
"""
