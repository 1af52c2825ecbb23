import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from logimaster.rules.models import Rules

RULES_ENV = "LOGIMASTER_RULES"
DEFAULT_RULES_PATH = Path(__file__).resolve().parent / "default_rules.yaml"


def resolve_rules_path(path: Path | None = None) -> Path:
    """Explicit path, then $LOGIMASTER_RULES, then the packaged defaults."""
    if path is not None:
        return path
    env_path = os.environ.get(RULES_ENV)
    if env_path:
        return Path(env_path)
    return DEFAULT_RULES_PATH


def load_rules(path: Path | None = None) -> Rules:
    """
    Load and validate the rules file.
    Raises FileNotFoundError if file missing.
    Raises ValueError if the YAML or the schema is invalid.
    """
    path = resolve_rules_path(path)
    if not path.exists():
        raise FileNotFoundError(f"Rules file not found at: {path}")

    with open(path, encoding="utf-8") as f:
        content = f.read()

    # Rules may live in a markdown doc inside a ```yaml fence
    lines = content.splitlines()
    yaml_lines = []
    in_block = False
    found_block = False

    for line in lines:
        s_line = line.strip()
        if s_line.startswith("```yaml"):
            in_block = True
            found_block = True
            continue
        if in_block and s_line.startswith("```"):
            break

        if in_block:
            yaml_lines.append(line)

    clean_content = "\n".join(yaml_lines) if found_block else content

    try:
        data = yaml.safe_load(clean_content)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML syntax in rules file: {e}") from e

    try:
        return Rules.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Rules validation failed:\n{e}") from e
