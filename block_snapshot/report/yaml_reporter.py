"""Render the block snapshot as YAML under a top-level ``block`` key."""

import yaml

from ..models.schema import BlockInfo


def render_yaml(info: BlockInfo) -> str:
    return yaml.safe_dump(info.to_dict(), sort_keys=False, allow_unicode=True)
