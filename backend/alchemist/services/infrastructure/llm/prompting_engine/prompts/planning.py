"""
Module planning prompts.
"""

from .base import PromptTemplate

MODULE_PLAN = PromptTemplate(
    template="""You are an expert instructional designer. Break a broad academic topic into a logical sequence of 2 to 3 smaller, focused sub-modules that build upon each other to explain the overall topic effectively.

Topic: {topic}

Return JSON with:
1. "overall_topic": echo back the original topic.
2. "planned_modules": an array of 2 to 3 sub-modules, ordered so each builds on the previous one. For each:
   - "title": a concise, engaging title. Titles must be distinct.
   - "concept": a brief 1-2 sentence concept explaining what this sub-module covers. It guides all content generated for the sub-module.

Example for the topic "The Solar System":
- "Introduction to the Sun and Inner Planets": Explore the Sun's role and the characteristics of Mercury, Venus, Earth, and Mars.
- "The Outer Planets and Beyond": Discover the gas giants, the ice giants, and dwarf planets like Pluto.
- "Asteroids, Comets, and Meteors": Learn about the smaller bodies of the solar system and their significance.

The number of planned modules must be between 2 and 3.""",
    description="Plan 2-3 progressive sub-modules for a topic",
)
