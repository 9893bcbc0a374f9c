import re
from pathlib import Path
from typing import Any, Mapping, Optional

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"


class Template:
    """Tiny ``{{ key }}`` substitution renderer.

    Values are inserted as-is. Escaping untrusted text is the caller's job.
    """

    def __init__(self, directory: Path = TEMPLATES_DIR) -> None:
        self.directory = directory

    def load(self, name: str) -> str:
        return (self.directory / name).read_text(encoding="utf-8")

    def render(self, body: str, data: Optional[Mapping[str, Any]] = None) -> str:
        if not data:
            return body

        values = {str(key): "" if value is None else str(value) for key, value in data.items()}
        # One scan over the original body, so inserted values are never expanded again.
        pattern = re.compile("|".join(re.escape("{{ %s }}" % key) for key in values))
        return pattern.sub(lambda match: values[match.group(0)[3:-3]], body)
