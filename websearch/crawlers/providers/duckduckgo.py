"""DuckDuckGo HTML 엔드포인트 (Primary) - URL 구성/결과 추출."""

from __future__ import annotations

from typing import Iterator, List
from urllib.parse import urlencode

from selectolax.parser import HTMLParser

from websearch.core.config import settings
from websearch.core.exceptions import ProviderUnavailableException
from websearch.schemas.search_schema import ProviderKind, SearchResult

from ..parsing import RawBlock, collect_results, get_blocked_keyword, node_attr, node_text


BASE_URL = "https://duckduckgo.com"

RESULT_SELECTOR = ".result"
TITLE_LINK_SELECTOR = ".result__title a"
SNIPPET_SELECTOR = ".result__snippet"


def build_duckduckgo_url(query: str, max_results: int) -> str:
    # html 엔드포인트는 결과 수 파라미터가 없음 (max_results는 추출 단계에서 적용)
    _ = max_results
    return f"{settings.primary_search_url}?{urlencode({'q': query})}"


def _iter_blocks(parser: HTMLParser) -> Iterator[RawBlock]:
    for element in parser.css(RESULT_SELECTOR):
        link = element.css_first(TITLE_LINK_SELECTOR)
        yield RawBlock(
            title=node_text(link),
            href=node_attr(link, "href"),
            snippet=node_text(element.css_first(SNIPPET_SELECTOR)),
        )


def parse_duckduckgo_results(html: str, max_results: int) -> List[SearchResult]:
    parser = HTMLParser(html or "")

    if parser.css_first(RESULT_SELECTOR) is None:
        kw = get_blocked_keyword(html)
        if kw:
            raise ProviderUnavailableException(
                ProviderKind.PRIMARY.value, f"blocked (keyword={kw})"
            )
        return []

    return collect_results(
        _iter_blocks(parser),
        max_results=max_results,
        source=ProviderKind.PRIMARY,
        base_url=BASE_URL,
    )
