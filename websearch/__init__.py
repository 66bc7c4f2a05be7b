"""웹 검색 수집/캐시 서비스"""

__version__ = "1.0.0"
