"""Function declarations offered to the model as tools.

Each declaration implies the row shape parsed by ``gemini_media.timecodes``.
"""

from google.genai import types

SET_TIMECODES = "set_timecodes"
SET_TIMECODES_WITH_OBJECTS = "set_timecodes_with_objects"
SET_TIMECODES_WITH_NUMERIC_VALUES = "set_timecodes_with_numeric_values"

_TIME = types.Schema(type=types.Type.STRING, description="Timecode as HH:MM:SS")


def _timecodes_parameter(
    properties: dict[str, types.Schema], required: list[str]
) -> types.Schema:
    return types.Schema(
        type=types.Type.OBJECT,
        properties={
            "timecodes": types.Schema(
                type=types.Type.ARRAY,
                items=types.Schema(
                    type=types.Type.OBJECT,
                    properties=properties,
                    required=required,
                ),
            )
        },
        required=["timecodes"],
    )


FUNCTION_DECLARATIONS: tuple[types.FunctionDeclaration, ...] = (
    types.FunctionDeclaration(
        name=SET_TIMECODES,
        description="Set the timecodes for the video with associated text",
        parameters=_timecodes_parameter(
            {"time": _TIME, "text": types.Schema(type=types.Type.STRING)},
            ["time", "text"],
        ),
    ),
    types.FunctionDeclaration(
        name=SET_TIMECODES_WITH_OBJECTS,
        description=(
            "Set the timecodes for the video with associated text and object list"
        ),
        parameters=_timecodes_parameter(
            {
                "time": _TIME,
                "text": types.Schema(type=types.Type.STRING),
                "objects": types.Schema(
                    type=types.Type.ARRAY,
                    items=types.Schema(type=types.Type.STRING),
                ),
            },
            ["time", "text", "objects"],
        ),
    ),
    types.FunctionDeclaration(
        name=SET_TIMECODES_WITH_NUMERIC_VALUES,
        description=(
            "Set the timecodes for the video with associated numeric values"
        ),
        parameters=_timecodes_parameter(
            {"time": _TIME, "value": types.Schema(type=types.Type.NUMBER)},
            ["time", "value"],
        ),
    ),
)


def generation_tools() -> list[types.Tool]:
    """Tools list for ``GenerateContentConfig``."""
    return [types.Tool(function_declarations=list(FUNCTION_DECLARATIONS))]
