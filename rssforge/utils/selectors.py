from __future__ import annotations
import logging
from pathlib import Path
from typing import Dict, List, Optional

import yaml

from rssforge.core.config import FALLBACK_SELECTORS, SITE_SELECTORS, SITE_SELECTORS_PATH
from rssforge.utils.url_utils import hostname_of

logger = logging.getLogger(__name__)


def load_site_selectors(path: Path = SITE_SELECTORS_PATH) -> Dict[str, List[str]]:
    """기본 사이트별 셀렉터 + site_selectors.yaml (있으면 호스트 단위로 덮어씀)

    site_selectors.yaml 형식:
        sites:
          www.example.com:
            - ".headline a"
    """
    table = {host: list(sels) for host, sels in SITE_SELECTORS.items()}
    if not path.exists():
        return table
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    sites = data.get("sites", {}) if isinstance(data, dict) else {}
    for host, sels in (sites or {}).items():
        if isinstance(sels, str):
            sels = [sels]
        sels = [s for s in (sels or []) if isinstance(s, str) and s.strip()]
        if sels:
            table[str(host).lower()] = sels
    logger.debug(f"사이트별 셀렉터 {len(sites or {})}건 로드: {path}")
    return table


def resolve_selectors(
    url: str,
    selector: Optional[str] = None,
    site_selectors: Optional[Dict[str, List[str]]] = None,
) -> List[str]:
    """사용할 셀렉터 목록 결정

    지정 셀렉터 → 호스트별 셀렉터 → 기본 셀렉터 순. 지정 셀렉터가 있으면 그것만 사용
    """
    if selector is not None and selector.strip():
        return [selector]
    table = site_selectors if site_selectors is not None else SITE_SELECTORS
    return list(table.get(hostname_of(url)) or FALLBACK_SELECTORS)
