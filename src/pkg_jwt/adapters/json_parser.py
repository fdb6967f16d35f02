import json
from typing import Any, Dict

from ..domain.entities import Header, Payload
from ..domain.exceptions import JWTDecodeError


class JSONTokenParser:
    """
    Adapter implementing the TokenParser port with the stdlib `json` module.

    Unknown keys are kept in the parsed tree so private claims survive.
    """

    def parse_header(self, json_text: str) -> Header:
        return Header(self._load(json_text, "header"))

    def parse_payload(self, json_text: str) -> Payload:
        return Payload(self._load(json_text, "payload"))

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def _load(json_text: str, part: str) -> Dict[str, Any]:
        try:
            tree = json.loads(json_text)
        except ValueError as exc:
            raise JWTDecodeError(f"The token's {part} had an invalid JSON format.") from exc

        if not isinstance(tree, dict):
            raise JWTDecodeError(f"The token's {part} must be a JSON object.")

        return tree


default_parser = JSONTokenParser()
