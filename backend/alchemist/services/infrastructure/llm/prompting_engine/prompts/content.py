"""
Interactive lesson content prompts.

The {placeholder} value is always the shared IMAGE_PLACEHOLDER_TOKEN; the
content step substitutes the real image after generation.
"""

from .base import PromptTemplate

INTERACTIVE_CONTENT = PromptTemplate(
    template="""You are an expert web developer and instructional designer creating interactive educational content.
Generate a single, self-contained HTML document for one learning module.

Module Title: {module_title}
Core Concept: {animation_concept}
Style Keywords: {keywords}
Module Image: {placeholder}

Requirements:
1. Layout: a responsive two-column layout. One column shows the module image, the other shows the title as a heading and the core concept as paragraph text. Columns stack on narrow screens.
2. Interactivity: below the introduction, add interactive learning sections suited to the concept, such as tabs with deeper explanations, flip flashcards with key terms, and a short multiple-choice quiz (2-3 questions) with immediate feedback.
3. Animation: a smooth slide-in or fade-up entrance animation, using CSS animations where possible. Let the style keywords guide the look and motion.
4. Styling: a modern, clean aesthetic with a pleasant color scheme, a common sans-serif font, readable font sizes and line height. The image fits its column (max-width: 100%; height: auto) with rounded corners.
5. Structure: everything in one document. CSS goes in <style> tags, JavaScript in <script> tags. No external resources, libraries or fonts.
6. The <img> tag's src attribute for the module image MUST be exactly "{placeholder}". Do not embed, invent or link any other image.

Return JSON with a single field "html_content" containing the complete HTML document, starting with <!DOCTYPE html>.""",
    description="Self-contained interactive HTML lesson with an image placeholder",
)
