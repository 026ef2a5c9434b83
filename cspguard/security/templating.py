"""Jinja helpers for nonce-carrying script tags."""
from flask import Flask, current_app
from markupsafe import Markup, escape

from cspguard.security.headers import is_current_request_excluded
from cspguard.security.nonce import declares_nonce, inject_first


def render_tag(tag_name: str, attributes: dict, content: str = None) -> str:
    """Render a single element with escaped attribute values."""
    parts = [tag_name]
    for name, value in attributes.items():
        if value is None or value is False:
            continue
        if value is True:
            parts.append(name)
        else:
            parts.append(f'{name}="{escape(value)}"')

    html = f"<{' '.join(parts)}>"
    if content is not None:
        html += f"{content}</{tag_name}>"
    return html


def csp_script(content: str = '', **attributes) -> Markup:
    """
    Render an inline ``<script>`` carrying the request nonce.

    ``content`` is emitted as-is. Use ``type_`` or ``class_`` for
    attribute names that clash with Python keywords.
    """
    attributes = {name.rstrip('_').replace('_', '-'): value for name, value in attributes.items()}
    tag = render_tag('script', attributes, content)

    if is_current_request_excluded() or declares_nonce(tag):
        return Markup(tag)

    nonce_source = current_app.extensions['csp_nonce_source']
    return Markup(inject_first(tag, nonce_source.next()))


def csp_nonce() -> str:
    return current_app.extensions['csp_nonce_source'].next()


def register_template_helpers(app: Flask):
    app.jinja_env.globals.update(csp_script=csp_script, csp_nonce=csp_nonce)
