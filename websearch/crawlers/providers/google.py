"""Google 웹 검색 (Fallback) - URL 구성/결과 추출.

Google 마크업은 자주 바뀌므로 스니펫 셀렉터는 여러 후보를 함께 둡니다.
"""

from __future__ import annotations

from typing import Iterator, List
from urllib.parse import urlencode

from selectolax.parser import HTMLParser

from websearch.core.config import settings
from websearch.core.exceptions import ProviderUnavailableException
from websearch.schemas.search_schema import ProviderKind, SearchResult

from ..parsing import RawBlock, collect_results, get_blocked_keyword, node_attr, node_text


BASE_URL = "https://www.google.com"

RESULT_SELECTOR = "div.g"
TITLE_SELECTOR = "h3"
LINK_SELECTOR = "a[href]"
SNIPPET_SELECTOR = ".VwiC3b, .s3v9rd, .st"


def build_google_url(query: str, max_results: int) -> str:
    return f"{settings.fallback_search_url}?{urlencode({'q': query, 'num': max_results})}"


def _iter_blocks(parser: HTMLParser) -> Iterator[RawBlock]:
    for element in parser.css(RESULT_SELECTOR):
        yield RawBlock(
            title=node_text(element.css_first(TITLE_SELECTOR)),
            href=node_attr(element.css_first(LINK_SELECTOR), "href"),
            snippet=node_text(element.css_first(SNIPPET_SELECTOR)),
        )


def parse_google_results(html: str, max_results: int) -> List[SearchResult]:
    parser = HTMLParser(html or "")

    if parser.css_first(RESULT_SELECTOR) is None:
        kw = get_blocked_keyword(html)
        if kw:
            raise ProviderUnavailableException(
                ProviderKind.FALLBACK.value, f"blocked (keyword={kw})"
            )
        return []

    return collect_results(
        _iter_blocks(parser),
        max_results=max_results,
        source=ProviderKind.FALLBACK,
        base_url=BASE_URL,
    )
