import logging
from urllib.parse import urlsplit

from playwright.sync_api import BrowserContext, Route

logger = logging.getLogger(__name__)

AD_DOMAINS = ('googlesyndication.com',)


def is_ad_host(host: str, domains: tuple[str, ...] = AD_DOMAINS) -> bool:
    return any(host == domain or host.endswith(f'.{domain}') for domain in domains)


def handle_ad_route(route: Route) -> None:
    """
    Abort requests to ad domains (and their subdomains), let everything else through.
    A URL whose host cannot be parsed is let through as well.
    """
    url = route.request.url
    try:
        host = urlsplit(url).hostname or ''
    except ValueError:
        logger.debug(f"Could not parse request url, letting it through: {url}")
        route.continue_()
        return

    if is_ad_host(host):
        route.abort()
    else:
        route.continue_()


def block_ads(context: BrowserContext) -> BrowserContext:
    """
    Install the ad blocking route on a browser context.

    Must run before the first navigation in the context, otherwise early requests slip through.
    """
    context.route('**/*', handle_ad_route)
    return context
