"""In-page script bodies shared by scenarios.

Each script is a function body run through ``evaluate``; its ``return`` value
comes back as a raw remote value.
"""

import json

PAGE_INFO = """
return {
    title: document.title,
    url: window.location.href,
    bodyText: document.body.innerText.substring(0, 100)
};
"""

WINDOW_STATE = """
return {
    currentUrl: window.location.href,
    windowTitle: document.title,
    windowName: window.name || 'main',
    frameCount: window.frames.length,
    hasOpener: window.opener !== null,
    isTopWindow: window.parent === window
};
"""

TABLES = """
return Array.from(document.querySelectorAll('table')).map(
    table => Array.from(table.rows).map(
        row => Array.from(row.querySelectorAll('th, td')).map(
            cell => cell.textContent.trim()
        )
    )
);
"""


def is_checked(selector: str) -> str:
    """Script returning the checked state of the first matching input."""
    return f"return document.querySelector({json.dumps(selector)}).checked;"


def input_value(selector: str) -> str:
    """Script returning the value of the first matching input, or None."""
    return (
        f"let el = document.querySelector({json.dumps(selector)});\n"
        "return el ? el.value : null;"
    )


def click_by_text(selector: str, text: str, *, exact: bool = False) -> str:
    """Script clicking the first element whose label matches text.

    The label is the element's value or text content, compared
    case-insensitively unless exact is set.
    """
    if exact:
        condition = f"label === {json.dumps(text)}"
    else:
        condition = f"label.toLowerCase().includes({json.dumps(text.lower())})"
    return f"""
for (let el of document.querySelectorAll({json.dumps(selector)})) {{
    let label = (el.value || el.textContent || '').trim();
    if ({condition}) {{
        let rect = el.getBoundingClientRect();
        el.click();
        return {{
            clicked: true,
            text: label.substring(0, 50),
            tag: el.tagName,
            xPos: Math.round(rect.left),
            yPos: Math.round(rect.top)
        }};
    }}
}}
return {{clicked: false}};
"""


def capture_dialog(kind: str) -> str:
    """Script replacing window.<kind> with a capturing stub."""
    return f"""
window.__captured_{kind} = null;
window.{kind} = function(msg) {{
    window.__captured_{kind} = msg;
    return true;
}};
return true;
"""


def captured_dialog(kind: str) -> str:
    """Script returning the message captured by the dialog stub."""
    return f"return window.__captured_{kind};"
