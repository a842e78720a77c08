"""
Helpers that pull the primary result out of a Responses API document.

Response shapes vary by model and tool use, so each helper checks only the
structure it needs and raises a NavigationError naming the exact piece that
was missing.
"""

from typing import Any

from oaiwire.core.errors import NavigationError, NavigationFailure, ServiceError

IMAGE_GENERATION_TOOL = "image_generation"


def _output_items(response: Any, caller: str) -> list[Any]:
    output = response.get("output") if isinstance(response, dict) else None
    if not isinstance(output, list):
        raise NavigationError(f"{caller}: response has no output array", NavigationFailure.NO_OUTPUT_ARRAY)
    return output


def raise_for_error(response: Any) -> None:
    """
    Raise ServiceError if the document carries a non-null ``error`` entry.

    The message and type come from the entry when they are strings.
    """
    if not isinstance(response, dict) or response.get("error") is None:
        return

    err = response["error"]
    message, error_type = "unknown error", "error"
    if isinstance(err, dict):
        if isinstance(err.get("message"), str):
            message = err["message"]
        if isinstance(err.get("type"), str):
            error_type = err["type"]
    elif isinstance(err, str):
        message = err
    raise ServiceError(message, error_type=error_type, details={"error": err})


def first_text_output(response: Any) -> str:
    """
    Return the text of the first message item in ``output``.

    Reasoning and tool-call items ahead of the message are skipped. An
    ``error`` entry takes priority over everything else.

    Raises:
        ServiceError: If the response carries an error entry
        NavigationError: NO_OUTPUT_ARRAY, NO_MESSAGE_ITEM, NO_CONTENT or
            NO_TEXT_FIELD, depending on which structure is missing

    """
    raise_for_error(response)

    output = _output_items(response, "first_text_output")
    if not output:
        raise NavigationError(
            "first_text_output: response contains no output items",
            NavigationFailure.NO_OUTPUT_ARRAY,
        )

    message = next(
        (item for item in output if isinstance(item, dict) and item.get("type") == "message"),
        None,
    )
    if message is None:
        raise NavigationError(
            "first_text_output: no message block found in output",
            NavigationFailure.NO_MESSAGE_ITEM,
        )

    content = message.get("content")
    if not isinstance(content, list) or not content:
        raise NavigationError(
            "first_text_output: message block contains no content",
            NavigationFailure.NO_CONTENT,
        )

    first = content[0]
    if isinstance(first, dict) and isinstance(first.get("text"), str):
        return first["text"]
    raise NavigationError(
        "first_text_output: no text field found in content",
        NavigationFailure.NO_TEXT_FIELD,
    )


def first_tool_call_output(response: Any, tool_type: str) -> dict[str, Any]:
    """
    Return the first output item produced by the tool ``tool_type``.

    Matches either a specialized item (``type == f"{tool_type}_call"``, e.g.
    ``image_generation_call``) or a generic ``tool_call`` item whose
    ``tool_name`` equals ``tool_type``.

    Raises:
        NavigationError: NO_OUTPUT_ARRAY or NO_TOOL_CALL

    """
    call_type = f"{tool_type}_call"
    for item in _output_items(response, "first_tool_call_output"):
        if not isinstance(item, dict) or not isinstance(item.get("type"), str):
            continue
        if item["type"] == call_type:
            return item
        if item["type"] == "tool_call" and item.get("tool_name") == tool_type:
            return item

    raise NavigationError(
        f"first_tool_call_output: no tool call found for {tool_type!r}",
        NavigationFailure.NO_TOOL_CALL,
        details={"tool_type": tool_type},
    )


def first_image_generation_call(response: Any) -> dict[str, Any]:
    """Return the first image generation tool call item."""
    return first_tool_call_output(response, IMAGE_GENERATION_TOOL)


def first_image_output(response: Any) -> str:
    """
    Return the first base64 image payload from an image generation call.

    ``result`` may be a single base64 string or a list whose first element
    is one.

    Raises:
        NavigationError: NO_OUTPUT_ARRAY, NO_TOOL_CALL, NO_RESULT_FIELD, or
            BAD_RESULT_SHAPE (null, empty list, or non-string elements)

    """
    call = first_image_generation_call(response)
    if "result" not in call:
        raise NavigationError(
            "first_image_output: image generation call has no result field",
            NavigationFailure.NO_RESULT_FIELD,
        )

    result = call["result"]
    if isinstance(result, str):
        return result
    if isinstance(result, list) and result and isinstance(result[0], str):
        return result[0]

    raise NavigationError(
        "first_image_output: result is neither a string nor a non-empty list of strings",
        NavigationFailure.BAD_RESULT_SHAPE,
    )
