from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

# Prompts are plain text, so no HTML autoescaping
env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=False,
    undefined=StrictUndefined,
    trim_blocks=True,
    lstrip_blocks=True,
)


def render_prompt(name: str, **context) -> str:
    """Render one of the bundled prompt templates, e.g. ``render_prompt("cover_letter", ...)``."""
    return env.get_template(f"{name}.j2").render(**context).strip()
