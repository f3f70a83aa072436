from __future__ import annotations

from typing import List

from appraiser.knowledge.schema import MakerMark


# ---------------- Maker marks ----------------
MAKER_MARKS: List[MakerMark] = [
    # furniture
    MakerMark(
        id="furniture-stickley-gustav",
        maker="Gustav Stickley",
        mark_description='Red decal with joiner\'s compass and motto "Als Ik Kan"',
        variations=["Craftsman", "red decal", "paper label", "branded"],
        active_years="1900-1916",
        origin="Syracuse, NY",
        category="furniture",
        value_multiplier=2.5,
        notes="Most valuable Stickley. Look for original finish and paper labels.",
    ),
    MakerMark(
        id="furniture-stickley-l-jg",
        maker="L. & J.G. Stickley",
        mark_description='Handcraft decal or "The Work of..." label',
        variations=["Handcraft", "Work of L&JG"],
        active_years="1902-present",
        origin="Fayetteville, NY",
        category="furniture",
        value_multiplier=1.8,
        notes="Still in production. Vintage pieces command premium.",
    ),
    MakerMark(
        id="furniture-herman-miller",
        maker="Herman Miller",
        mark_description="Metal medallion or label with company name",
        variations=["Zeeland, Michigan label", "Made in U.S.A.", "circular medallion"],
        active_years="1923-present",
        origin="Zeeland, MI",
        category="furniture",
        value_multiplier=2.0,
        notes="Eames and Nelson designs most valuable. Check for authenticity labels.",
    ),
    MakerMark(
        id="furniture-knoll",
        maker="Knoll",
        mark_description="Knoll label or stamp",
        variations=["Knoll International", "Knoll Associates"],
        active_years="1938-present",
        origin="East Greenville, PA",
        category="furniture",
        value_multiplier=1.8,
        notes="Barcelona Chair, Tulip series most sought after.",
    ),
    MakerMark(
        id="furniture-thonet",
        maker="Thonet",
        mark_description='Paper label or brand stamp "THONET"',
        variations=["Thonet Vienna", "Gebruder Thonet", "Thonet Brothers"],
        active_years="1853-present",
        origin="Vienna, Austria",
        category="furniture",
        value_multiplier=1.5,
        notes="No. 14 chair most famous. Original 19th century pieces very valuable.",
    ),
    # ceramics
    MakerMark(
        id="ceramics-rookwood",
        maker="Rookwood Pottery",
        mark_description="Reverse RP monogram with flames",
        variations=["flames count = year after 1886", "artist signatures below"],
        active_years="1880-1967",
        origin="Cincinnati, OH",
        category="ceramics",
        value_multiplier=2.0,
        notes="Count flames to date. Artists like Shirayamadani command premium.",
    ),
    MakerMark(
        id="ceramics-roseville",
        maker="Roseville Pottery",
        mark_description='Raised or impressed "ROSEVILLE" or "Rv"',
        variations=["Roseville USA", "pattern name impressed", "paper labels"],
        active_years="1890-1954",
        origin="Roseville/Zanesville, OH",
        category="ceramics",
        value_multiplier=1.5,
        notes="Pinecone, Futura, Sunflower patterns most valuable.",
    ),
    MakerMark(
        id="ceramics-weller",
        maker="Weller Pottery",
        mark_description='Incised or stamped "WELLER"',
        variations=["Weller Pottery", "Weller Ware", "script signature"],
        active_years="1872-1948",
        origin="Zanesville, OH",
        category="ceramics",
        value_multiplier=1.3,
        notes="Hudson, Sicard lines most valuable. Many art lines.",
    ),
    MakerMark(
        id="ceramics-grueby",
        maker="Grueby Faience",
        mark_description='Circular stamp "GRUEBY" with lotus',
        variations=["Grueby Pottery", "Grueby Faience Co."],
        active_years="1894-1920",
        origin="Boston, MA",
        category="ceramics",
        value_multiplier=3.0,
        notes="Matte green glaze iconic. Lamp bases highly sought.",
    ),
    MakerMark(
        id="ceramics-meissen",
        maker="Meissen",
        mark_description="Crossed blue swords",
        variations=["sword variations indicate era", "sometimes with dot or star"],
        active_years="1710-present",
        origin="Meissen, Germany",
        category="ceramics",
        value_multiplier=3.0,
        notes="First European porcelain. Figurines and tableware valuable.",
    ),
    MakerMark(
        id="ceramics-wedgwood",
        maker="Wedgwood",
        mark_description='Impressed "WEDGWOOD"',
        variations=["WEDGWOOD & BENTLEY (1769-80)", "ENGLAND added 1891+"],
        active_years="1759-present",
        origin="Staffordshire, England",
        category="ceramics",
        value_multiplier=1.5,
        notes="Jasperware iconic. Portland Vase copies valuable.",
    ),
    # silver
    MakerMark(
        id="silver-tiffany",
        maker="Tiffany & Co.",
        mark_description="TIFFANY & CO with pattern number",
        variations=["STERLING", "TIFFANY & CO MAKERS", "T&CO"],
        active_years="1837-present",
        origin="New York, NY",
        category="silver",
        value_multiplier=2.5,
        notes="Chrysanthemum, Audubon patterns premium. Japanese style highly valued.",
    ),
    MakerMark(
        id="silver-gorham",
        maker="Gorham Manufacturing Co.",
        mark_description="Lion, anchor, G mark",
        variations=["GORHAM", "Martelé", "STERLING", "date marks"],
        active_years="1831-present",
        origin="Providence, RI",
        category="silver",
        value_multiplier=1.8,
        notes="Martelé art silver extremely valuable. Chantilly pattern popular.",
    ),
    MakerMark(
        id="silver-georg-jensen",
        maker="Georg Jensen",
        mark_description="GJ in dotted oval or beaded rectangle",
        variations=["Georg Jensen DENMARK", "STERLING", "numbered designs"],
        active_years="1904-present",
        origin="Copenhagen, Denmark",
        category="silver",
        value_multiplier=2.5,
        notes="Blossom pattern iconic. Modernist designs highly collectible.",
    ),
    MakerMark(
        id="silver-paul-revere",
        maker="Paul Revere",
        mark_description="REVERE in rectangle or PR script",
        variations=["Paul Revere script", "REVERE block letters"],
        active_years="1765-1818",
        origin="Boston, MA",
        category="silver",
        value_multiplier=10.0,
        notes="Extremely rare and valuable. Sons of Liberty Bowl famous.",
    ),
    # glass
    MakerMark(
        id="glass-tiffany-favrile",
        maker="Tiffany Studios",
        mark_description="L.C.T. or Louis C. Tiffany Favrile",
        variations=["LCT", "L.C. Tiffany Favrile", "Tiffany Studios New York"],
        active_years="1893-1933",
        origin="Corona, NY",
        category="glass",
        value_multiplier=5.0,
        notes="Favrile glass iridescent. Lamp shades extremely valuable.",
    ),
    MakerMark(
        id="glass-lalique",
        maker="René Lalique / Lalique",
        mark_description="R. LALIQUE or LALIQUE FRANCE",
        variations=["R. Lalique France", "Lalique France", "script vs block"],
        active_years="1885-present",
        origin="Paris, France",
        category="glass",
        value_multiplier=3.0,
        notes="R. Lalique (pre-1945) more valuable than Lalique (post-1945).",
    ),
    MakerMark(
        id="glass-steuben",
        maker="Steuben Glass",
        mark_description="Acid-etched fleur-de-lis or STEUBEN",
        variations=["Aurene signature", "fleur-de-lis", "STEUBEN"],
        active_years="1903-2011",
        origin="Corning, NY",
        category="glass",
        value_multiplier=2.0,
        notes="Frederick Carder era (1903-1932) most valuable.",
    ),
    # watches
    MakerMark(
        id="watch-rolex",
        maker="Rolex",
        mark_description="Crown logo, ROLEX on dial and case",
        variations=["Oyster Perpetual", "reference numbers on case"],
        active_years="1905-present",
        origin="Geneva, Switzerland",
        category="watches",
        value_multiplier=3.0,
        notes="Verify reference numbers. Vintage sports models extremely valuable.",
    ),
    MakerMark(
        id="watch-patek",
        maker="Patek Philippe",
        mark_description="Calatrava cross, PATEK PHILIPPE GENEVE",
        variations=["reference numbers", "case back engravings"],
        active_years="1839-present",
        origin="Geneva, Switzerland",
        category="watches",
        value_multiplier=5.0,
        notes="Holy grail of watches. Perpetual calendar, minute repeaters premium.",
    ),
    MakerMark(
        id="watch-omega",
        maker="Omega",
        mark_description="Omega symbol, reference numbers",
        variations=["Seamaster", "Speedmaster", "Constellation"],
        active_years="1848-present",
        origin="Biel, Switzerland",
        category="watches",
        value_multiplier=1.5,
        notes='Speedmaster "Moon Watch" iconic. Early references valuable.',
    ),
    # toys
    MakerMark(
        id="toy-steiff",
        maker="Steiff",
        mark_description='Button in ear with "Steiff" tag',
        variations=["blank button (pre-1905)", "yellow tag", "white tag"],
        active_years="1880-present",
        origin="Giengen, Germany",
        category="toys",
        value_multiplier=3.0,
        notes="Button in ear is authentication. Early teddy bears extremely valuable.",
    ),
    MakerMark(
        id="toy-hubley",
        maker="Hubley Manufacturing",
        mark_description="HUBLEY cast into iron",
        variations=["Hubley USA", "HUBLEY TOYS"],
        active_years="1894-1978",
        origin="Lancaster, PA",
        category="toys",
        value_multiplier=1.5,
        notes="Cast iron toys, doorstops. Original paint crucial for value.",
    ),
    MakerMark(
        id="toy-lionel",
        maker="Lionel Corporation",
        mark_description="LIONEL on trains and boxes",
        variations=["Lionel Lines", "Lionel Electric Trains"],
        active_years="1900-present",
        origin="New York, NY",
        category="toys",
        value_multiplier=2.0,
        notes="Pre-war O gauge most valuable. Original boxes add significant value.",
    ),
]
