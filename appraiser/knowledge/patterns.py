from __future__ import annotations

from typing import List

from appraiser.knowledge.schema import IdentificationPattern


# ---------------- Identification patterns ----------------
IDENTIFICATION_PATTERNS: List[IdentificationPattern] = [
    IdentificationPattern(
        category="furniture",
        item_type="Eames Lounge Chair",
        key_identifiers=[
            "Herman Miller medallion on underside",
            "Rosewood or walnut veneer shells",
            "Down-filled leather cushions",
            "Five-star aluminum base",
            "Serial number and production date",
        ],
        value_factors=[
            "Original leather condition",
            "Rosewood vs walnut (rosewood = premium)",
            "First generation (1956-1970) = highest value",
            "Matching ottoman",
            "Original shock mounts intact",
        ],
        common_mistakes=[
            "Confusing with reproductions (Plycraft, Selig)",
            "Missing production date = could be fake",
            "Replaced shock mounts reduce value",
        ],
        red_flags=[
            "No Herman Miller label",
            "Shells don't match in color/grain",
            "Vinyl instead of leather",
            "Wrong base style for era",
        ],
        period_indicators={
            "1956-1960": "Down cushions, earliest HM labels",
            "1961-1970": "Down cushions, updated labels",
            "1971-1990": "Foam cushions introduced",
            "1990-present": "Modern production, still valuable",
        },
    ),
    IdentificationPattern(
        category="furniture",
        item_type="Chippendale Chair",
        key_identifiers=[
            "Ball and claw feet",
            "Acanthus leaf carving on knees",
            "Pierced splat back (ribbon, Gothic, or Chinese)",
            "Cabriole legs",
            "Typical era: 1750-1790",
        ],
        value_factors=[
            "Original finish and patina",
            "Philadelphia origin = highest value",
            "Provenance documentation",
            "Matched set vs single chairs",
            "Quality of carving",
        ],
        common_mistakes=[
            "Confusing Centennial reproductions (1876+)",
            'Chippendale "style" is not a period piece',
            "Refinished pieces worth less",
        ],
        red_flags=[
            "Machine-made dovetails",
            "Phillips head screws",
            "Uniform dark stain hiding repairs",
            "Wrong wood for claimed origin",
        ],
        period_indicators={
            "Period (1750-1790)": "Hand-cut dovetails, rose-head nails",
            "Centennial (1876-1920)": "Better machine work, still hand-finished",
            "Revival (1920-1960)": "More uniform construction",
        },
    ),
    IdentificationPattern(
        category="ceramics",
        item_type="Rookwood Pottery Vase",
        key_identifiers=[
            "Reverse RP monogram on base",
            "Flame marks (count = years after 1886)",
            "Artist's cipher/signature",
            "Shape numbers",
            "Glaze type identification",
        ],
        value_factors=[
            "Standard Glaze with portraits = high value",
            "Sea Green, Iris glazes premium",
            "Known artists (Shirayamadani, Valentien) = 2-10x value",
            "Large size pieces",
            "Exceptional decoration",
        ],
        common_mistakes=[
            "Not all Rookwood is valuable (mass production pieces)",
            "Confusing with similar Ohio potteries",
            "Overcleaning removes valuable patina",
        ],
        red_flags=[
            "Flame marks inconsistent with claimed date",
            "Artist signature doesn't match style",
            "Repair or restoration",
            "Secondary market marks added",
        ],
        period_indicators={
            "1880-1886": "No flames, early marks",
            "1886-1900": "Count flames + 1886 = year",
            "1900-1906": "Fourteen flames max, then Roman numerals",
            "1906-1960": "Roman numerals for year",
        },
    ),
    IdentificationPattern(
        category="silver",
        item_type="Georgian Sterling Silver Teapot",
        key_identifiers=[
            "Full English hallmarks (4-5 marks)",
            "Lion passant (sterling standard)",
            "City mark (leopard=London, anchor=Birmingham)",
            "Date letter (changes annually)",
            "Maker's mark (initials)",
        ],
        value_factors=[
            "Famous makers (Hester Bateman, Paul Storr) = premium",
            "Weight (heavier = more valuable)",
            "Original condition vs repairs",
            "Provenance and family crests",
            "Period appropriate form",
        ],
        common_mistakes=[
            "Silverplate with worn marks mistaken for sterling",
            "Misreading date letters",
            "Fake or transposed marks",
        ],
        red_flags=[
            "Marks in wrong location",
            "Marks don't match claimed date",
            "Lead solder repairs",
            "Marks rubbed/illegible (possibly intentional)",
        ],
        period_indicators={
            "Georgian (1714-1830)": "Hand-raised, heavier, simpler forms",
            "Victorian (1837-1901)": "More ornate, thinner gauge",
            "Edwardian (1901-1910)": "Lighter, Neo-classical revival",
        },
    ),
    IdentificationPattern(
        category="jewelry",
        item_type="Art Deco Diamond Ring",
        key_identifiers=[
            "Geometric design (step cuts, chevrons)",
            "Platinum setting (most common)",
            "Calibré-cut side stones",
            "Milgrain edging",
            "Filigree openwork",
        ],
        value_factors=[
            "Center stone size and quality",
            "Original vs replaced stones",
            "Platinum vs white gold",
            "Signed pieces (Cartier, Van Cleef) = premium",
            "Condition of delicate filigree",
        ],
        common_mistakes=[
            'Confusing Art Deco with Art Deco "style"',
            "White gold repairs on platinum pieces",
            "Later stone replacements",
        ],
        red_flags=[
            "Modern round brilliant cuts (pre-1950 = old European)",
            "Wrong metal for period",
            "Modern safety catch on brooch",
            "Laser inscriptions (modern)",
        ],
        period_indicators={
            "1920-1935 (true Art Deco)": "Platinum, old European/mine cuts, hand engraving",
            "1935-1945 (Retro)": "Rose gold, larger stones, bolder designs",
            "Revival (1980s+)": "Modern cuts, different metal quality",
        },
    ),
    IdentificationPattern(
        category="watches",
        item_type="Rolex Submariner",
        key_identifiers=[
            "Crown logo at 12 o'clock",
            "Cyclops magnification over date (2.5x)",
            "Reference number between lugs",
            "Serial number on case",
            "Oyster bracelet or NATO strap",
        ],
        value_factors=[
            "Reference number (5513, 1680, 16800 etc.)",
            "Dial variations (gilt, matte, tropical)",
            "Box and papers",
            "Service history",
            "Patina on dial/bezel (can add or subtract value)",
        ],
        common_mistakes=[
            "Frankenwatches (mixed parts from different years)",
            "Redials (refinished dials)",
            "Service dials replacing original",
        ],
        red_flags=[
            "Wrong magnification (should be 2.5x)",
            "Date wheel font incorrect",
            "Bezel insert color off",
            "Case serial doesn't match papers",
            "Movement serial doesn't match case",
        ],
        period_indicators={
            "1954-1969 (5512/5513)": "No date, gilt dials, pointed crown guards",
            "1969-1979 (1680)": "First date model, matte dials",
            "1979-1988 (16800)": "Sapphire crystal, quickset date",
            "1988-present": "Various updates, SuperLuminova",
        },
    ),
    IdentificationPattern(
        category="art",
        item_type="Currier and Ives Print",
        key_identifiers=[
            "Stone lithograph on period paper",
            "Publisher's address on print",
            "Hand-coloring typical",
            "Print size categories (small, medium, large folio)",
            "Title in decorative script below image",
        ],
        value_factors=[
            "Subject matter (hunting, winter scenes = premium)",
            "Size (large folio most valuable)",
            "Condition (no foxing, tears, fading)",
            "Original frame",
            "Print state (first state most valuable)",
        ],
        common_mistakes=[
            "Photo-mechanical reproductions",
            "Later restrike editions",
            "Confusing with other 19th c. lithographers",
        ],
        red_flags=[
            "Printed dots visible (modern reproduction)",
            "Paper too white (should be aged)",
            "Colors too bright (fading expected)",
            "Wrong address for claimed date",
        ],
        period_indicators={
            "1834-1857": '"N. Currier" signature',
            "1857-1907": '"Currier & Ives" signature',
            "Reproductions": "Many made in 1940s-1970s",
        },
    ),
    IdentificationPattern(
        category="glass",
        item_type="Tiffany Favrile Vase",
        key_identifiers=[
            "L.C.T. signature on base",
            "Iridescent surface finish",
            "Organic flowing forms",
            "Rich color variations",
            "Pontil mark characteristics",
        ],
        value_factors=[
            "Form (jack-in-the-pulpit = premium)",
            "Paperweight style = extremely valuable",
            "Pulled feather decoration",
            "Rare colors (red, aqua)",
            "Size (larger = more valuable)",
        ],
        common_mistakes=[
            "Confusing with Loetz, Steuben, or modern reproductions",
            "Faked signatures on period art glass",
            "Assuming all iridescent glass is Tiffany",
        ],
        red_flags=[
            "Signature looks new or scratched",
            "Iridescence too uniform",
            "Wrong numbering system",
            "Modern pontil characteristics",
        ],
        period_indicators={
            "1893-1910": "L.C.T. signature most common",
            "1910-1920": "Louis C. Tiffany full name",
            "1920-1933": "Tiffany Favrile mark",
        },
    ),
    IdentificationPattern(
        category="glass",
        item_type="Lalique Glass",
        key_identifiers=[
            "Signature on base (R. LALIQUE or LALIQUE)",
            "Frosted or opalescent finish",
            "Molded relief decoration",
            "High-quality finish and detail",
            "Nature or figural motifs",
        ],
        value_factors=[
            "R. LALIQUE (pre-1945) vs LALIQUE (post-1945)",
            "Rare models and colors",
            "Condition of frosted surface",
            "Original patina intact",
            "Size and complexity",
        ],
        common_mistakes=[
            "Not distinguishing pre-war from post-war",
            "Confusing with Sabino or other French glass",
            "Overlooking later production",
        ],
        red_flags=[
            "Wheel-cut vs molded signature (know the difference)",
            "Wrong signature style for claimed date",
            "Chips to frosted areas",
            "Replaced parts on compound pieces",
        ],
        period_indicators={
            "1885-1945": "R. LALIQUE FRANCE",
            "1945-present": "LALIQUE FRANCE (no R.)",
        },
    ),
    IdentificationPattern(
        category="textiles",
        item_type="Navajo Rug",
        key_identifiers=[
            "Hand-woven wool construction",
            "Characteristic geometric patterns",
            "Hand-spun vs commercial yarn",
            "Natural vs synthetic dyes",
            "Horizontal banded design (Chief blanket)",
        ],
        value_factors=[
            "Phase (First, Second, Third for Chief blankets)",
            "Age (pre-1900 = highest value)",
            "Weaver identification if known",
            "Pattern complexity and execution",
            "Condition (no holes, repairs)",
        ],
        common_mistakes=[
            "Confusing Mexican with Navajo weaving",
            "Not recognizing synthetic dyes",
            "Overlooking condition issues",
        ],
        red_flags=[
            "Warp visible (wear issues)",
            "Aniline dye bleeding",
            "Machine-made construction",
            "Modern reproductions",
        ],
        period_indicators={
            "1800-1863": "Classic period, simple patterns",
            "1863-1900": "Transition period, more complex",
            "1900-1940": "Rug period, regional styles emerge",
        },
    ),
    IdentificationPattern(
        category="textiles",
        item_type="Persian Carpet",
        key_identifiers=[
            "Hand-knotted construction (check back)",
            "Knot type (Persian/Senneh vs Turkish/Ghiordes)",
            "Wool pile on cotton/silk foundation",
            "Regional design characteristics",
            "Natural dye colors",
        ],
        value_factors=[
            "Knot density (higher = more valuable)",
            "Silk content",
            "Age and condition",
            "Workshop or city of origin",
            "Unusual colors or patterns",
        ],
        common_mistakes=[
            "Confusing machine-made with hand-knotted",
            "Misattributing regional origin",
            "Not recognizing repairs",
        ],
        red_flags=[
            "Machine-made fringe (should be integral)",
            "Latex backing (modern)",
            'Synthetic dyes in "antique"',
            "Cut pile hiding wear",
        ],
        period_indicators={
            "Antique (1850-1900)": "Natural dyes, wool foundation",
            "Semi-antique (1900-1950)": "Some synthetic dyes",
            "Modern (1950+)": "Often synthetic dyes, cotton foundation",
        },
    ),
    IdentificationPattern(
        category="lighting",
        item_type="Tiffany Lamp",
        key_identifiers=[
            "Leaded glass shade with copper foil technique",
            "Bronze base with patina",
            "TIFFANY STUDIOS NEW YORK stamp",
            "Favrile glass used in shade",
            "Nature-inspired motifs (Dragonfly, Wisteria, etc.)",
        ],
        value_factors=[
            "Pattern rarity (Dragonfly, Wisteria = premium)",
            "Size (larger = more valuable)",
            "Glass quality and color",
            "Base matches shade style",
            "Original patina intact",
        ],
        common_mistakes=[
            "Confusing with reproductions (many exist)",
            "Mixed bases and shades",
            "Replaced glass segments",
        ],
        red_flags=[
            "No stamp on base",
            "Lead lines too uniform (machine)",
            "Modern soldering technique",
            "Glass doesn't match period",
        ],
        period_indicators={
            "1895-1905": "Early production, simpler designs",
            "1905-1920": "Peak production, most patterns",
            "1920-1933": "Later production, fewer designs",
        },
    ),
    IdentificationPattern(
        category="lighting",
        item_type="Art Deco Lamp",
        key_identifiers=[
            "Geometric or streamlined forms",
            "Chrome, nickel, or bronze finish",
            "Frosted or milk glass shade",
            "Stepped or tiered design",
            "Machine Age aesthetics",
        ],
        value_factors=[
            "Designer attribution",
            "Chrome quality and condition",
            "Original glass shade",
            "Period correct wiring",
            "Notable manufacturers",
        ],
        common_mistakes=[
            "Confusing Art Deco with Art Nouveau",
            "Reproductions from 1980s",
            "Replaced shades",
        ],
        red_flags=[
            "Modern wiring throughout",
            "Chrome too shiny (re-plated)",
            "Wrong bulb socket type",
        ],
        period_indicators={
            "1920-1935": "True Art Deco, geometric",
            "1935-1945": "Streamline Moderne, curved",
        },
    ),
    IdentificationPattern(
        category="toys",
        item_type="Steiff Teddy Bear",
        key_identifiers=[
            "Button in left ear (critical)",
            "Mohair or plush covering",
            "Jointed limbs",
            "Glass or shoe-button eyes",
            "Excelsior or cotton stuffing",
        ],
        value_factors=[
            "Age (pre-1910 = highest value)",
            "Condition of mohair",
            "Original features intact",
            "Button and tag presence",
            "Size (larger = more valuable)",
        ],
        common_mistakes=[
            "Confusing with other German makers",
            "Not recognizing restored pieces",
            "Button variations not understood",
        ],
        red_flags=[
            "No button or wrong button",
            "Modern synthetic materials",
            "Re-covered or restored",
            "Eyes replaced",
        ],
        period_indicators={
            "1902-1905": "Blank button (no text)",
            "1905-1950": "Steiff text on button",
            "1950-present": "Various tag systems",
        },
    ),
    IdentificationPattern(
        category="toys",
        item_type="Cast Iron Toy",
        key_identifiers=[
            "Cast iron construction",
            "Painted surface (original critical)",
            "Maker's mark cast in",
            "Period styling reflects era",
            "Moving parts (wheels, etc.)",
        ],
        value_factors=[
            "Original paint condition",
            "Maker (Hubley, Arcade premium)",
            "Rarity of model",
            "Complete vs missing parts",
            "Box (extremely rare)",
        ],
        common_mistakes=[
            "Reproductions exist (some convincing)",
            "Repaints devalue significantly",
            "Not recognizing married parts",
        ],
        red_flags=[
            "Paint too bright/fresh",
            "Wrong casting details",
            "Modern fasteners",
            "Weight seems wrong",
        ],
        period_indicators={
            "1880-1900": "Simpler designs, heavier",
            "1900-1940": "Peak production, more detail",
        },
    ),
    IdentificationPattern(
        category="books",
        item_type="First Edition Book",
        key_identifiers=[
            "First edition statement on copyright page",
            "First printing points",
            "Original binding",
            "Period correct dust jacket",
            "Publisher's information correct",
        ],
        value_factors=[
            "Author importance",
            "Title significance",
            "Dust jacket presence/condition",
            "Signature or inscription",
            "Binding condition",
        ],
        common_mistakes=[
            "Book club editions marked as first",
            "Later printings assumed to be first",
            "Facsimile dust jackets",
        ],
        red_flags=[
            "Wrong price on dust jacket",
            "Book club indicia",
            "Later printing numbers",
            "Restored dust jacket",
        ],
        period_indicators={
            "First Printing": "No additional printings noted",
            "Later Printing": "Numbers or statements indicate reprints",
        },
    ),
]
