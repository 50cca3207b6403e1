# tienda/modules/scraper/extractors.py
"""
Extractores heurísticos para páginas de producto de AliExpress/Alibaba.

Cada campo tiene una lista ordenada de extractores independientes; el primero
que devuelve un valor gana. Ningún extractor lanza excepciones: si el patrón
no aparece devuelven None (o una lista vacía en el caso de las imágenes).
"""
import html
import re
from typing import Callable, Iterable, List, Optional

MAX_IMAGES = 5
MIN_PRICE = 0.0
MAX_PRICE = 10000.0

Extractor = Callable[[str], Optional[str]]

# ==================== TÍTULO ====================

OG_TITLE_RE = re.compile(r'<meta\s+property="og:title"\s+content="([^"]+)"', re.IGNORECASE)
TITLE_TAG_RE = re.compile(r'<title>([^<]+)</title>', re.IGNORECASE)
MARKETPLACE_SUFFIX_RES = [
    re.compile(r'-\s*AliExpress.*$', re.IGNORECASE),
    re.compile(r'-\s*Alibaba.*$', re.IGNORECASE),
]
PIPE_SUFFIX_RE = re.compile(r'\|.*$')


def strip_marketplace_suffix(title: str) -> str:
    for pattern in MARKETPLACE_SUFFIX_RES:
        title = pattern.sub('', title)
    return title.strip()


def og_title(page: str) -> Optional[str]:
    match = OG_TITLE_RE.search(page)
    if not match:
        return None
    return strip_marketplace_suffix(html.unescape(match.group(1))) or None


def title_tag(page: str) -> Optional[str]:
    match = TITLE_TAG_RE.search(page)
    if not match:
        return None
    title = strip_marketplace_suffix(html.unescape(match.group(1)))
    return PIPE_SUFFIX_RE.sub('', title).strip() or None


TITLE_EXTRACTORS: List[Extractor] = [og_title, title_tag]

# ==================== DESCRIPCIÓN ====================

DESCRIPTION_RE = re.compile(
    r'<meta\s+(?:name|property)="(?:description|og:description)"\s+content="([^"]+)"',
    re.IGNORECASE
)


def meta_description(page: str) -> Optional[str]:
    match = DESCRIPTION_RE.search(page)
    if not match:
        return None
    return html.unescape(match.group(1)).strip() or None


DESCRIPTION_EXTRACTORS: List[Extractor] = [meta_description]

# ==================== PRECIO ====================

PRICE_PATTERNS = [
    re.compile(r'\$\s*([\d,]+\.?\d*)'),
    re.compile(r'USD\s*([\d,]+\.?\d*)', re.IGNORECASE),
    re.compile(r'price[\'":\s]*[\'"$]*\s*([\d,]+\.?\d*)', re.IGNORECASE),
    re.compile(r'"price":\s*"?\$?([\d,]+\.?\d*)', re.IGNORECASE),
]


def parse_price(raw: str) -> Optional[float]:
    try:
        return float(raw.replace(',', ''))
    except ValueError:
        return None


def is_plausible_price(value: Optional[float]) -> bool:
    return value is not None and MIN_PRICE < value < MAX_PRICE


def extract_price(page: str) -> float:
    """
    Primer precio plausible según el orden de PRICE_PATTERNS; 0 si ninguno sirve.

    Solo se evalúa la primera coincidencia de cada patrón.
    """
    for pattern in PRICE_PATTERNS:
        match = pattern.search(page)
        if not match:
            continue
        value = parse_price(match.group(1))
        if is_plausible_price(value):
            return value
    return 0.0

# ==================== IMÁGENES ====================

OG_IMAGE_RE = re.compile(r'<meta\s+property="og:image(?::url)?"\s+content="([^"]+)"', re.IGNORECASE)
IMAGE_PATH_LIST_RE = re.compile(r'"imagePathList":\s*\[([^\]]+)\]')
QUOTED_RE = re.compile(r'"([^"]+)"')
CDN_IMAGE_RE = re.compile(
    r'(https?://[^"\'\s]+(?:alicdn|ae01|cbu01)[^"\'\s]+\.(?:jpg|jpeg|png|webp))',
    re.IGNORECASE
)
SKIPPED_IMAGE_MARKERS = ('avatar', 'icon')


def og_images(page: str) -> List[str]:
    return [html.unescape(url) for url in OG_IMAGE_RE.findall(page)]


def json_image_list(page: str) -> List[str]:
    match = IMAGE_PATH_LIST_RE.search(page)
    if not match:
        return []
    return [url for url in QUOTED_RE.findall(match.group(1)) if url.startswith('http')]


def cdn_images(page: str) -> List[str]:
    return CDN_IMAGE_RE.findall(page)


IMAGE_COLLECTORS: List[Callable[[str], List[str]]] = [og_images, json_image_list, cdn_images]


def is_content_image(url: str) -> bool:
    lowered = url.lower()
    return not any(marker in lowered for marker in SKIPPED_IMAGE_MARKERS)


def extract_images(page: str, limit: int = MAX_IMAGES) -> List[str]:
    """
    Imágenes en orden de prioridad, sin duplicados ni avatares/iconos
    """
    images: List[str] = []
    for collector in IMAGE_COLLECTORS:
        for url in collector(page):
            if len(images) >= limit:
                return images
            if url and url not in images and is_content_image(url):
                images.append(url)
    return images

# ==================== UTILIDADES ====================

def first_match(extractors: Iterable[Extractor], page: str) -> Optional[str]:
    """
    Resultado del primer extractor que encuentre algo
    """
    for extractor in extractors:
        value = extractor(page)
        if value:
            return value
    return None


def extract_title(page: str) -> Optional[str]:
    return first_match(TITLE_EXTRACTORS, page)


def extract_description(page: str) -> Optional[str]:
    return first_match(DESCRIPTION_EXTRACTORS, page)
