from __future__ import annotations

from typing import List, Optional
from urllib.parse import quote

from appraiser.agents.analysis.schema import MarketplaceLink

MARKETPLACE_SEARCH_URLS = (
    ("eBay", "https://www.ebay.com/sch/i.html?_nkw={q}&_sop=12&LH_Complete=1&LH_Sold=1"),
    ("Chairish", "https://www.chairish.com/search?q={q}"),
    ("1stDibs", "https://www.1stdibs.com/search/?q={q}"),
    ("Ruby Lane", "https://www.rubylane.com/search?q={q}"),
    ("Etsy", "https://www.etsy.com/search?q={q}"),
)


def generate_marketplace_links(name: str, brand: Optional[str] = None) -> List[MarketplaceLink]:
    """Search links (eBay sold listings first) for "<brand> <name>"."""
    search_terms = " ".join(part for part in (brand, name) if part)
    encoded = quote(search_terms, safe="")
    return [
        MarketplaceLink(marketplace_name=marketplace, link_url=template.format(q=encoded))
        for marketplace, template in MARKETPLACE_SEARCH_URLS
    ]
