"""Security headers middleware."""
import logging
from typing import Dict, List, Optional, Sequence
from flask import Flask, current_app, g, request

from cspguard.policy.models import FetchPolicy, FlagPolicy
from cspguard.security.gate import request_context_from_flask, should_exclude
from cspguard.security.nonce import NonceSource, SecretsNonceSource, inject

logger = logging.getLogger(__name__)

CSP_HEADER = 'Content-Security-Policy'
CSP_REPORT_ONLY_HEADER = 'Content-Security-Policy-Report-Only'


class RequestNonceSource:
    """Hands out one nonce per request, kept on ``flask.g``.

    A nonce issued here is picked up by the header hook and added to
    ``script-src``, so every nonce placed in markup is also allowed.
    """

    def __init__(self, generator: Optional[NonceSource] = None):
        self.generator = generator or SecretsNonceSource()

    def next(self) -> str:
        if 'csp_nonce' not in g:
            g.csp_nonce = self.generator.next()
        return g.csp_nonce

    @staticmethod
    def issued():
        return g.get('csp_nonce')


def render_fetch_policy(policy: FetchPolicy) -> str:
    sources = []
    if policy.self_allowed:
        sources.append("'self'")
    if policy.inline_allowed:
        sources.append("'unsafe-inline'")
    if policy.eval_allowed:
        sources.append("'unsafe-eval'")
    if policy.dynamic_allowed:
        sources.append("'strict-dynamic'")
    if policy.event_handlers_allowed:
        sources.append("'unsafe-hashes'")
    sources.extend(f"'nonce-{nonce}'" for nonce in policy.nonce_values)
    sources.extend(f"'{digest}'" for digest in policy.hashes)
    sources.extend(policy.host_sources)
    sources.extend(f"{scheme}:" for scheme in policy.scheme_sources)

    if not sources:
        sources.append("'none'")
    return f"{policy.id} {' '.join(sources)}"


def render_policies(policies: Sequence) -> Dict[str, str]:
    """Serialize policies into CSP header values, keyed by header name."""
    directives = {CSP_HEADER: [], CSP_REPORT_ONLY_HEADER: []}
    for policy in policies:
        header = CSP_REPORT_ONLY_HEADER if policy.report_only else CSP_HEADER
        if isinstance(policy, FetchPolicy):
            directives[header].append(render_fetch_policy(policy))
        elif isinstance(policy, FlagPolicy):
            directives[header].append(policy.id)
        else:
            logger.warning(f"Skipping unsupported policy type {type(policy).__name__}")

    return {name: '; '.join(values) for name, values in directives.items() if values}


def add_script_nonce(policies: Sequence, nonce: str) -> List:
    """Allow a nonce in every script-src policy, adding one if there is none."""
    result = []
    found = False
    for policy in policies:
        if isinstance(policy, FetchPolicy) and policy.id == 'script-src':
            policy = policy.with_nonce(nonce)
            found = True
        result.append(policy)

    if not found:
        result.append(FetchPolicy('script-src', self_allowed=True, nonce_values=(nonce,)))
    return result


def is_current_request_excluded() -> bool:
    config = current_app.config['CSPGUARD_CONFIG']
    return should_exclude(request_context_from_flask(request), config.gate_flags())


def add_nonce_to_body(response, nonce_source: NonceSource) -> None:
    """Inject the request nonce into every script tag of an HTML response.

    The body is decoded with the charset the response declares. A body that
    cannot be decoded or re-encoded is left exactly as it was.
    """
    if response.direct_passthrough or response.is_streamed:
        return
    if response.mimetype != 'text/html':
        return

    charset = response.mimetype_params.get('charset', 'utf-8')
    try:
        html = response.get_data().decode(charset)
        if not html or '<script' not in html.lower():
            return
        body = inject(html, nonce_source.next()).encode(charset)
    except Exception as e:
        logger.error(f"Failed to add nonce to {request.path} response body: {e}")
        return

    response.set_data(body)


def apply_security_headers(app: Flask):
    """Apply CSP and hardening headers to all responses."""
    nonce_source = RequestNonceSource()
    app.extensions['csp_nonce_source'] = nonce_source

    @app.after_request
    def set_security_headers(response):
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'SAMEORIGIN'
        response.headers['Referrer-Policy'] = 'strict-origin-when-cross-origin'

        if not is_current_request_excluded():
            add_nonce_to_body(response, nonce_source)

        policies = current_app.config['CSP_COLLECTOR'].collect()
        nonce = nonce_source.issued()
        if nonce:
            policies = add_script_nonce(policies, nonce)

        for header, value in render_policies(policies).items():
            response.headers[header] = value
        return response
