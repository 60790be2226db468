"""
Services - model gateway infrastructure, generation pipeline and use cases.
"""
