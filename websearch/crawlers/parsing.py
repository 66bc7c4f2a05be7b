"""검색 결과 HTML 파싱 - 공통 유틸.

네트워크(fetch)와 분리된 순수 파싱/검증 로직입니다.
프로바이더별 셀렉터는 providers/ 하위 모듈에 있습니다.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional

from selectolax.parser import Node

from websearch.core.logging import logger
from websearch.schemas.search_schema import ProviderKind, SearchResult
from websearch.utils.text_utils import clean_text
from websearch.utils.url_utils import normalize_result_url


_BLOCK_KEYWORDS = (
    # 결과 컨테이너가 없을 때만 검사하는 챌린지/차단 문구
    "captcha",
    "unusual traffic",
    "anomaly-modal",
    "are you a robot",
    "verify you are human",
)


@dataclass
class RawBlock:
    """결과 블록에서 뽑은 원본 값 (검증 전)"""

    title: str
    href: str
    snippet: str


def get_blocked_keyword(html: str) -> Optional[str]:
    if not html:
        return None
    lowered = html.lower()
    for k in _BLOCK_KEYWORDS:
        if k in lowered:
            return k
    return None


def node_text(node: Optional[Node]) -> str:
    if node is None:
        return ""
    return clean_text(node.text(deep=True) or "")


def node_attr(node: Optional[Node], name: str) -> str:
    if node is None:
        return ""
    value = node.attributes.get(name)
    return (value or "").strip()


def collect_results(
    blocks: Iterable[RawBlock],
    *,
    max_results: int,
    source: ProviderKind,
    base_url: str,
) -> List[SearchResult]:
    """블록을 문서 순서대로 검증하며 max_results개 '수집'될 때까지 진행.

    title/href/snippet 중 하나라도 비어 있으면 조용히 건너뛰며 개수에 포함하지 않습니다.
    """
    results: List[SearchResult] = []
    if max_results <= 0:
        return results

    skipped = 0
    for block in blocks:
        url = normalize_result_url(block.href, base_url=base_url)
        if not block.title or not url or not block.snippet:
            skipped += 1
            continue

        results.append(
            SearchResult(title=block.title, url=url, snippet=block.snippet, source=source)
        )
        if len(results) >= max_results:
            break

    if skipped:
        logger.debug(f"[PARSER:{source.value}] Skipped {skipped} incomplete blocks")
    return results
