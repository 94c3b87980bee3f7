import logging
from typing import Optional

import requests

from .errors import UpstreamError
from .formatter import join_passages
from .query import build_url
from .settings import request_timeout

AUTH_HEADER_TYPE = 'Token'  # Will be combined with the API key

# Create a session to reuse HTTP connections for performance.
session = requests.Session()


def fetch_passage_text(query: str, api_key: str,
                       http: Optional[requests.Session] = None,
                       timeout: Optional[float] = None) -> str:
    """Fetch the plain-text passages for a query from the ESV API.

    ESV API responses are JSON with:
    - passages: list of passage texts, each starting with its reference line
    - canonical: the canonical reference for the query
    - query: the query as received

    Args:
        query: Query string built by build_query
        api_key: The ESV API key
        http: Session to send the request with (defaults to the shared one)
        timeout: Seconds to wait for a response (defaults to ESV_CALLOUT_TIMEOUT)

    Returns:
        All passages joined with a blank line between them.

    Raises:
        UpstreamError: on a non-200 status, a transport failure, or a body
        without a list of passages.
    """
    http = http or session
    headers = {"Authorization": f"{AUTH_HEADER_TYPE} {api_key}"}
    url = build_url(query)

    try:
        response = http.get(url, headers=headers,
                            timeout=timeout if timeout is not None else request_timeout())
    except requests.RequestException as e:
        logging.error(f"Exception occurred while fetching passage text: {e}")
        raise UpstreamError(str(e)) from e

    if response.status_code != 200:
        logging.error(f"Error fetching passage for query {query}: {response.status_code}")
        raise UpstreamError(f"Error fetching passage: {response.reason}")

    try:
        data = response.json()
    except ValueError as e:
        raise UpstreamError(f"Malformed response body: {e}") from e

    passages = data.get('passages') if isinstance(data, dict) else None
    if not isinstance(passages, list):
        raise UpstreamError("Response did not contain any passages")

    logging.info(f"Fetched {len(passages)} passage(s) for {data.get('canonical') or query}")
    return join_passages(str(passage) for passage in passages)
