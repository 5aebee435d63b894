"""Render the block snapshot as JSON."""

import json

from ..models.schema import BlockInfo


def render_json(info: BlockInfo, pretty: bool = True) -> str:
    indent = 2 if pretty else None
    return json.dumps(info.to_dict(), indent=indent, ensure_ascii=False)
