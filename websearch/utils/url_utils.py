"""URL 파싱 유틸리티"""
from typing import Optional
from urllib.parse import urlparse, parse_qs, urljoin


# 프로바이더별 리다이렉트 래퍼: (호스트 조건, 경로, 타깃 파라미터 후보)
# - Google:     /url?q=<encoded-target>&sa=U&... 또는 /url?esrc=s&q=&url=<encoded-target>&...
# - DuckDuckGo: //duckduckgo.com/l/?uddg=<encoded-target>&rut=...
_REDIRECT_WRAPPERS = (
    ("google", "/url", ("q", "url")),
    ("duckduckgo", "/l/", ("uddg",)),
)


def unwrap_redirect_url(href: str) -> Optional[str]:
    """
    프로바이더 리다이렉트 래퍼 URL에서 실제 타깃 URL 추출
    
    Examples:
        >>> unwrap_redirect_url("/url?q=https%3A%2F%2Fexample.com%2Fa&sa=U")
        'https://example.com/a'
        >>> unwrap_redirect_url("//duckduckgo.com/l/?uddg=https%3A%2F%2Fexample.com&rut=x")
        'https://example.com'
        >>> unwrap_redirect_url("https://example.com/a")
        None
    
    Args:
        href: 결과 블록의 원본 href
        
    Returns:
        디코딩된 타깃 URL 또는 None (래퍼가 아닌 경우)
    """
    if not href:
        return None

    try:
        parsed = urlparse(href.strip())
        host = (parsed.netloc or "").lower()
        query_params = parse_qs(parsed.query)

        for host_hint, path, params in _REDIRECT_WRAPPERS:
            # 상대 경로 래퍼(/url?q=)는 호스트가 비어 있음
            if host and host_hint not in host:
                continue
            if parsed.path != path and parsed.path.rstrip("/") != path.rstrip("/"):
                continue
            for param in params:
                values = query_params.get(param)
                if values and values[0]:
                    return values[0]

        return None

    except Exception:
        return None


def normalize_href(href: str, base_url: str = "https://www.google.com") -> str:
    """상대/프로토콜-상대 href를 절대 URL로 정규화합니다.

    - "//host/path" -> "https://host/path"
    - "/path" -> "{base_url}/path"
    - "http(s)://..." -> 그대로
    """
    if not href:
        return ""

    h = href.strip()
    if not h:
        return ""

    if h.startswith("//"):
        return f"https:{h}"

    if h.startswith("/"):
        return urljoin(base_url, h)

    return h


def normalize_result_url(href: str, base_url: str) -> str:
    """결과 href를 저장 가능한 절대 http(s) URL로 변환.

    리다이렉트 래퍼를 먼저 벗겨낸 뒤 정규화합니다.
    http(s)가 아닌 값(javascript:, mailto: 등)은 빈 문자열을 반환합니다.
    """
    if not href:
        return ""

    target = unwrap_redirect_url(href) or href
    url = normalize_href(target, base_url=base_url)
    if not url.startswith(("http://", "https://")):
        return ""
    return url
