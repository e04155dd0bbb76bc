from __future__ import annotations
from typing import Optional
from urllib.parse import urljoin, urlparse, urlsplit

from rssforge.core.exceptions import ValidationError

ALLOWED_SCHEMES = ("http", "https")


def validate_url(raw: str | None) -> str:
    """절대 http/https URL인지 확인하고 원문 그대로 반환

    정규화는 하지 않음 (캐시/요청 제한 키는 입력 문자열 그대로 사용)
    """
    if raw is None or not raw.strip():
        raise ValidationError("missing")
    try:
        pr = urlparse(raw)
        # 포트 파싱 오류는 접근 시점에 ValueError
        pr.port
    except ValueError as e:
        raise ValidationError("malformed", detail=str(e)) from e
    if not pr.scheme or not pr.netloc:
        raise ValidationError("malformed", detail=f"절대 URL이 아님: {raw}")
    if pr.scheme.lower() not in ALLOWED_SCHEMES:
        raise ValidationError("bad_scheme", detail=f"scheme={pr.scheme}")
    if not pr.hostname:
        raise ValidationError("malformed", detail=f"호스트 없음: {raw}")
    return raw


def resolve_url(href: str, base: str) -> str:
    """href를 base 기준 절대 URL로 변환 (http로 시작하면 그대로)"""
    href = href.strip()
    if href.startswith("http"):
        return href
    return urljoin(base, href)


def try_resolve_url(href: str, base: str) -> Optional[str]:
    """resolve_url 과 같지만 해석할 수 없는 URL(예: "//[broken")이면 None"""
    try:
        url = resolve_url(href, base)
        urlsplit(url)
    except ValueError:
        return None
    return url


def hostname_of(url: str) -> str:
    return (urlparse(url).hostname or "").lower()
