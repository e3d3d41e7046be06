"""
Fragment - Renders the embeddable button markup

Pure functions over their inputs:
- button_fragment: the button span carrying the encrypted product
- error_fragment: a button span listing error messages, one child each
"""

import html
from typing import Iterable, Union

from ..errors import ProductError

BUTTON_CLASS = "giveit-button"
ERROR_CLASS = "giveit-error"


def escape_attribute(value: str) -> str:
    """Escape a value for use inside a double-quoted attribute"""
    return html.escape(str(value), quote=True)


def escape_text(value: str) -> str:
    """Escape element text; quotes are left as they are"""
    return html.escape(str(value), quote=False)


def button_fragment(button_type: str, encoded: str) -> str:
    """
    Render the button span

    Example:
        <span class="giveit-button" data-giveit-buttontype="blue_rect_sm" data-giveit-data="..."></span>
    """
    return (
        f'<span class="{BUTTON_CLASS}"'
        f' data-giveit-buttontype="{escape_attribute(button_type)}"'
        f' data-giveit-data="{escape_attribute(encoded)}"></span>'
    )


def error_fragment(errors: Iterable[Union[ProductError, str]]) -> str:
    """Render a button span holding one error span per message, in order"""
    lines = [f'\n<span class="{BUTTON_CLASS}">']

    for error in errors:
        lines.append(f'\t<span class="{ERROR_CLASS}">{escape_text(error)}</span>')

    lines.append("</span>\n")
    return "\n".join(lines)
