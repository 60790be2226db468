"""Infrastructure: model gateway, prompting, response parsing and job tracking."""
