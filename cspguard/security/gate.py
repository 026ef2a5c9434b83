"""Per-request exclusion rules for nonce injection."""
from dataclasses import dataclass

REST_API_MARKERS = ('/rest/', '/V1/')
TOKEN_ENDPOINT_MARKERS = ('/integration/admin/token', '/integration/customer/token')


@dataclass(frozen=True)
class RequestContext:
    request_uri: str = ''
    path_info: str = ''

    def contains_any(self, markers) -> bool:
        return any(m in self.path_info or m in self.request_uri for m in markers)


@dataclass(frozen=True)
class GateFlags:
    enabled: bool = False
    exclude_rest_api: bool = False
    exclude_admin_token: bool = False


def should_exclude(ctx: RequestContext, flags: GateFlags) -> bool:
    """
    Decide whether the nonce pipeline is skipped for a request.

    Markers are plain substrings of the path or URI, so ``/V1/`` matches
    anywhere in either.
    """
    if not flags.enabled:
        return True

    if flags.exclude_rest_api and ctx.contains_any(REST_API_MARKERS):
        return True

    if flags.exclude_admin_token and ctx.contains_any(TOKEN_ENDPOINT_MARKERS):
        return True

    return False


def request_context_from_flask(request) -> RequestContext:
    """Build a RequestContext from a Flask/werkzeug request."""
    uri = request.script_root + request.path
    query = request.query_string.decode('latin-1')
    if query:
        uri += '?' + query
    return RequestContext(request_uri=uri, path_info=request.path)
