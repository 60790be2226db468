"""
Static API settings and shared wire constants.
"""

import os

# API settings
API_TITLE = "Lesson Alchemist API"
API_DESCRIPTION = "Generate illustrated, narrated interactive academic modules from any topic"
API_VERSION = "1.0.0"

# CORS origins
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv(
        "CORS_ORIGINS",
        "http://localhost:3000,http://localhost:3001,http://localhost:5173,http://localhost:9002",
    ).split(",")
    if origin.strip()
]

# Marker the content model must use as the <img> source; replaced with the
# generated image's data URI after generation.
IMAGE_PLACEHOLDER_TOKEN = "%%IMAGE_DATA_URI_PLACEHOLDER%%"
