from __future__ import annotations

import json
import re
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError

T = TypeVar("T")


def _adapter(schema: Any) -> TypeAdapter:
    return TypeAdapter(schema)


def schema_name(schema: Any) -> str:
    """Human-readable name for a model class or an ``Annotated`` union."""
    name = getattr(schema, "__name__", None)
    if name:
        return name
    origin = getattr(schema, "__origin__", None)
    if origin is not None:
        return schema_name(origin)
    return repr(schema)


class OutputParser:
    """Parse LLM text output into validated values.

    ``schema`` is anything ``pydantic.TypeAdapter`` accepts: a model class,
    or a discriminated union such as ``PlayerQAResponse``.
    """

    @staticmethod
    def json_schema(schema: Any) -> dict:
        return _adapter(schema).json_schema(by_alias=True)

    @staticmethod
    def validate(data: Any, schema: Any) -> Any:
        return _adapter(schema).validate_python(data)

    @staticmethod
    def parse(text: str, schema: Any) -> Any:
        """Extract JSON from *text* and validate it against *schema*.

        Handles common LLM patterns:
        - Raw JSON objects
        - JSON wrapped in ```json ... ``` fences
        - JSON embedded in surrounding prose
        """
        adapter = _adapter(schema)

        # 1) Fenced code blocks first
        fenced = re.search(r"```(?:json)?\s*\n?(.*?)```", text, re.DOTALL)
        if fenced:
            return adapter.validate_json(fenced.group(1).strip())

        # 2) First balanced {...} object
        start = text.find("{")
        if start != -1:
            depth = 0
            end = start
            for i in range(start, len(text)):
                if text[i] == "{":
                    depth += 1
                elif text[i] == "}":
                    depth -= 1
                    if depth == 0:
                        end = i + 1
                        break
            try:
                return adapter.validate_json(text[start:end])
            except ValidationError:
                pass

        # 3) Last resort: the whole text as JSON
        try:
            return adapter.validate_python(json.loads(text.strip()))
        except (ValueError, ValidationError) as exc:
            raise ValueError(
                f"Could not parse LLM output into {schema_name(schema)}.\n"
                f"Raw text (first 500 chars): {text[:500]}"
            ) from exc

    @staticmethod
    def format_instructions(schema: Any) -> str:
        """Instructions appended to a system prompt to request *schema*."""
        schema_str = json.dumps(OutputParser.json_schema(schema), indent=2)
        return (
            "The output should be formatted as a JSON instance that conforms "
            "to the JSON schema below.\n\n"
            f"```json\n{schema_str}\n```\n\n"
            "Return ONLY the JSON object, no additional text."
        )
