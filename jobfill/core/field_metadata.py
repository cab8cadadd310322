"""
Field metadata extraction from parsed HTML form controls.

Reads every textual signal attached to an input/select/textarea: identifiers,
ARIA attributes, data-* attributes, option texts and the label. The label is
resolved in order of strength:

1. label[for=<id>] anywhere in the document (explicit binding)
2. an ancestor <label> wrapping the control
3. the nearest visible text before the control, then before its parent

Nothing here mutates the document.
"""

import re
from typing import Dict, List, Optional, Tuple

from bs4.element import NavigableString, PreformattedString, Tag

from jobfill.core.schemas import FieldMetadata


CONTROL_TAGS = ("input", "select", "textarea")

# Input kinds that never receive résumé data
IGNORED_INPUT_TYPES = {"hidden", "submit", "button", "reset", "image", "file", "password"}
SENSITIVE_TOKENS = ("captcha", "security")

# Elements whose text never counts as label text
_SKIP_TEXT_OF = {"select", "option", "textarea", "script", "style", "noscript"}
_STOP_ANCESTORS = {"body", "html", "[document]"}

HIDDEN_STYLE_RE = re.compile(r"display\s*:\s*none|visibility\s*:\s*hidden", re.IGNORECASE)


def _attr(tag: Tag, name: str) -> str:
    value = tag.get(name)
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return " ".join(value)
    return str(value)


def _int_attr(tag: Tag, name: str) -> int:
    try:
        return int(_attr(tag, name).strip() or 0)
    except ValueError:
        return 0


def _collapse(text: str) -> str:
    return " ".join(text.split())


def is_hidden(tag: Tag) -> bool:
    """Visibility from markup alone: the hidden attribute or an inline style."""
    if tag.has_attr("hidden"):
        return True
    return bool(HIDDEN_STYLE_RE.search(_attr(tag, "style")))


def visible_text(node: Tag) -> str:
    """Text content of a node, leaving out hidden elements and nested controls."""
    parts: List[str] = []
    for child in node.children:
        if isinstance(child, Tag):
            if child.name in _SKIP_TEXT_OF or is_hidden(child):
                continue
            parts.append(visible_text(child))
        elif isinstance(child, NavigableString) and not isinstance(child, PreformattedString):
            parts.append(str(child))
    return _collapse(" ".join(parts))


def control_type(tag: Tag) -> str:
    if tag.name == "select":
        return "select-multiple" if tag.has_attr("multiple") else "select-one"
    if tag.name == "textarea":
        return "textarea"
    return (_attr(tag, "type") or "text").strip().lower()


def is_relevant_field(tag: Tag) -> bool:
    """
    Decide whether a control is a candidate for autofill.

    Skipped: hidden, disabled and read-only controls, buttons, file pickers,
    passwords, and anything that looks like a captcha or security question.
    """
    if not isinstance(tag, Tag) or tag.name not in CONTROL_TAGS:
        return False

    kind = control_type(tag)
    if kind in IGNORED_INPUT_TYPES:
        return False
    if tag.has_attr("disabled") or tag.has_attr("readonly") or is_hidden(tag):
        return False
    if _attr(tag, "autocomplete").lower() == "new-password":
        return False

    identifiers = f"{_attr(tag, 'id')} {_attr(tag, 'name')}".lower()
    if any(token in identifiers for token in SENSITIVE_TOKENS):
        return False

    return True


def _document_root(tag: Tag) -> Tag:
    root = tag
    for parent in tag.parents:
        root = parent
    return root


def _node_text(node) -> str:
    if isinstance(node, Tag):
        if node.name in _SKIP_TEXT_OF or is_hidden(node):
            return ""
        return visible_text(node)
    if isinstance(node, NavigableString) and not isinstance(node, PreformattedString):
        return _collapse(str(node))
    return ""


def find_nearby_label_text(tag: Tag) -> str:
    """First non-empty visible text before the control, then before its parent."""
    anchors = [tag]
    if tag.parent is not None and tag.parent.name not in _STOP_ANCESTORS:
        anchors.append(tag.parent)

    for anchor in anchors:
        for sibling in anchor.previous_siblings:
            text = _node_text(sibling)
            if text:
                return text
    return ""


def resolve_label(tag: Tag) -> Tuple[str, bool]:
    """
    Return (label_text, label_for_field).

    label_for_field is True only for an explicit label[for=id] binding.
    """
    field_id = _attr(tag, "id")
    if field_id:
        label = _document_root(tag).find("label", attrs={"for": field_id})
        if label is not None:
            text = visible_text(label)
            if text:
                return text, True

    wrapping = tag.find_parent("label")
    if wrapping is not None:
        text = visible_text(wrapping)
        if text:
            return text, False

    return find_nearby_label_text(tag), False


def _current_value(tag: Tag) -> str:
    if tag.name == "textarea":
        return tag.get_text()
    if tag.name == "select":
        options = tag.find_all("option")
        chosen: Optional[Tag] = next((o for o in options if o.has_attr("selected")), None)
        if chosen is None and options:
            chosen = options[0]
        if chosen is None:
            return ""
        return _attr(chosen, "value") if chosen.has_attr("value") else chosen.get_text(" ", strip=True)
    return _attr(tag, "value")


def _data_attributes(tag: Tag) -> Dict[str, str]:
    return {name: _attr(tag, name) for name in tag.attrs if name.startswith("data-")}


def extract_metadata(tag: Tag) -> FieldMetadata:
    """Build the FieldMetadata snapshot for one control."""
    label_text, label_for_field = resolve_label(tag)

    options: List[str] = []
    if tag.name == "select":
        options = [o.get_text(" ", strip=True) for o in tag.find_all("option")]

    return FieldMetadata(
        id=_attr(tag, "id"),
        name=_attr(tag, "name"),
        type=control_type(tag),
        placeholder=_attr(tag, "placeholder"),
        class_name=_attr(tag, "class"),
        value=_current_value(tag),
        autocomplete=_attr(tag, "autocomplete"),
        aria_label=_attr(tag, "aria-label"),
        aria_labelledby=_attr(tag, "aria-labelledby"),
        aria_describedby=_attr(tag, "aria-describedby"),
        title=_attr(tag, "title"),
        data_attributes=_data_attributes(tag),
        label_text=label_text,
        label_for_field=label_for_field,
        required=tag.has_attr("required"),
        pattern=_attr(tag, "pattern"),
        min_length=_int_attr(tag, "minlength"),
        max_length=_int_attr(tag, "maxlength"),
        min=_attr(tag, "min"),
        max=_attr(tag, "max"),
        options=options,
    )
