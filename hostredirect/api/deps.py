from fastapi import Request

from hostredirect.components.redirects import RedirectResolver


# --- Resolver ---
def get_resolver(request: Request) -> RedirectResolver:
    resolver: RedirectResolver = request.app.state.resolver
    return resolver
