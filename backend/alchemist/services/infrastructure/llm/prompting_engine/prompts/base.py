"""
Base prompt template class.
"""

import re
from dataclasses import dataclass

_FIELD_RE = re.compile(r"\{([a-z_][a-z0-9_]*)\}")


@dataclass(frozen=True)
class PromptTemplate:
    """
    A prompt template with {name} placeholders.

    Only lower_snake_case names are substituted, so literal braces in the
    prompt (CSS, JSON examples) survive untouched.

    Usage:
        template = PromptTemplate(
            template="Explain {topic}.",
            description="A one-line explainer"
        )
        result = template.format(topic="Photosynthesis")
    """
    template: str
    description: str = ""

    @property
    def fields(self) -> frozenset:
        return frozenset(_FIELD_RE.findall(self.template))

    def format(self, **kwargs) -> str:
        """Format the template; every placeholder must be supplied."""
        missing = self.fields - kwargs.keys()
        if missing:
            raise KeyError(f"Missing prompt values: {', '.join(sorted(missing))}")
        return _FIELD_RE.sub(
            lambda m: str(kwargs[m.group(1)]) if m.group(1) in kwargs else m.group(0),
            self.template,
        )

    def __str__(self) -> str:
        return f"PromptTemplate({self.description})"
