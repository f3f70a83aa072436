from __future__ import annotations

from typing import List

from appraiser.knowledge.schema import AuthenticationCheckpoint, AuthenticationCriteria


# ---------------- Authentication checklists ----------------
AUTHENTICATION_CRITERIA: List[AuthenticationCriteria] = [
    AuthenticationCriteria(
        category="furniture",
        checkpoints=[
            AuthenticationCheckpoint(
                name="Construction Methods",
                description="Check joinery, hardware, and assembly techniques",
                pass_indicators=[
                    "Hand-cut dovetails (irregular spacing)",
                    "Wooden pegs securing joints",
                    "Rose-head or cut nails",
                    "Hand-planed surfaces (slight irregularities)",
                ],
                fail_indicators=[
                    "Machine-cut uniform dovetails",
                    "Phillips head screws",
                    "Staples or modern fasteners",
                    "Perfectly smooth machine surfaces",
                ],
                weight=9,
            ),
            AuthenticationCheckpoint(
                name="Wood and Patina",
                description="Examine wood type, aging, and surface condition",
                pass_indicators=[
                    "Appropriate wood for style and period",
                    "Natural age patina on exposed surfaces",
                    "Shrinkage across grain direction",
                    "Oxidation on unseen surfaces",
                ],
                fail_indicators=[
                    "Wrong wood species for claimed origin",
                    "Uniform artificial aging",
                    "No shrinkage on wide boards",
                    "Fresh wood smell",
                ],
                weight=8,
            ),
            AuthenticationCheckpoint(
                name="Hardware",
                description="Verify original vs replacement hardware",
                pass_indicators=[
                    "Period-appropriate style",
                    "Evidence of hand filing",
                    "Original attachment holes match hardware",
                    "Natural wear patterns consistent with use",
                ],
                fail_indicators=[
                    "Modern reproduction hardware",
                    "Extra screw holes from replacements",
                    "Hardware inconsistent with furniture style",
                    "No wear on high-touch areas",
                ],
                weight=7,
            ),
        ],
    ),
    AuthenticationCriteria(
        category="ceramics",
        checkpoints=[
            AuthenticationCheckpoint(
                name="Marks and Signatures",
                description="Verify maker's marks and artist signatures",
                pass_indicators=[
                    "Marks consistent with documented examples",
                    "Appropriate mark for claimed period",
                    "Mark applied before firing",
                    "Signature style matches known examples",
                ],
                fail_indicators=[
                    "Marks don't match documented variations",
                    "Mark anachronistic for claimed date",
                    "Mark painted over glaze (added later)",
                    "Signature inconsistent with artist's work",
                ],
                weight=10,
            ),
            AuthenticationCheckpoint(
                name="Glaze and Decoration",
                description="Analyze glaze type and decorative techniques",
                pass_indicators=[
                    "Glaze appropriate for maker and period",
                    "Hand-painted elements show variation",
                    "Glaze pooling in crevices (natural)",
                    "Colors match documented palette",
                ],
                fail_indicators=[
                    "Transfer print patterns (on hand-painted claim)",
                    "Too perfect uniformity",
                    "Colors unknown for this maker",
                    "Modern fluorescent glazes",
                ],
                weight=8,
            ),
            AuthenticationCheckpoint(
                name="Form and Weight",
                description="Check shape and construction quality",
                pass_indicators=[
                    "Shape matches catalog examples",
                    "Appropriate weight for material",
                    "Evidence of hand-throwing (if claimed)",
                    "Proportions correct for pattern",
                ],
                fail_indicators=[
                    "Shape doesn't match known examples",
                    "Too light or heavy for type",
                    'Mold seams on "hand-thrown" piece',
                    "Proportions slightly off",
                ],
                weight=7,
            ),
        ],
    ),
    AuthenticationCriteria(
        category="silver",
        checkpoints=[
            AuthenticationCheckpoint(
                name="Hallmarks",
                description="Read and verify all hallmarks",
                pass_indicators=[
                    "All four/five hallmarks present and clear",
                    "Marks in correct location for type",
                    "Date letter matches other period indicators",
                    "Maker's mark documented for period",
                ],
                fail_indicators=[
                    "Marks in wrong position",
                    "Date letter doesn't match style",
                    "Marks from different periods on same piece",
                    "Marks too crisp (fresh struck = fake)",
                ],
                weight=10,
            ),
            AuthenticationCheckpoint(
                name="Construction",
                description="Examine manufacturing technique",
                pass_indicators=[
                    "Hand-raising evidence (hammer marks inside)",
                    "Period-appropriate soldering",
                    "Consistent gauge throughout",
                    "Hand-chased decoration",
                ],
                fail_indicators=[
                    "Spinning marks (modern technique)",
                    "Lead solder (repairs)",
                    "Thin spots from over-polishing",
                    "Cast reproduction of hand-chased original",
                ],
                weight=8,
            ),
            AuthenticationCheckpoint(
                name="Weight and Feel",
                description="Assess silver content and quality",
                pass_indicators=[
                    "Substantial weight for size",
                    "Warm feel (silver conducts heat)",
                    "Musical ring when tapped",
                    "Appropriate tarnish pattern",
                ],
                fail_indicators=[
                    "Too light for silver",
                    "Magnetic response",
                    "Dull thud when tapped",
                    "Base metal visible through wear",
                ],
                weight=7,
            ),
        ],
    ),
    AuthenticationCriteria(
        category="watches",
        checkpoints=[
            AuthenticationCheckpoint(
                name="External Authenticity",
                description="Verify case, dial, and hands",
                pass_indicators=[
                    "Serial number matches claimed year",
                    "Reference number appropriate for model",
                    "Dial printing quality correct",
                    "Hands correct style for reference",
                ],
                fail_indicators=[
                    "Serial outside range for reference",
                    "Dial text font incorrect",
                    "Wrong hand style",
                    "Case finishing inconsistent",
                ],
                weight=9,
            ),
            AuthenticationCheckpoint(
                name="Movement",
                description="Verify movement authenticity (if accessible)",
                pass_indicators=[
                    "Movement matches reference",
                    "Serial matches case era",
                    "Correct caliber for model",
                    "Finishing consistent with era",
                ],
                fail_indicators=[
                    "Wrong movement for case",
                    "Aftermarket modifications",
                    "Movement serial mismatches case",
                    "Poor finishing quality",
                ],
                weight=10,
            ),
            AuthenticationCheckpoint(
                name="Provenance",
                description="Documentation and history",
                pass_indicators=[
                    "Original box and papers",
                    "Service history from authorized dealer",
                    "Consistent ownership history",
                    "Matching serial on all documents",
                ],
                fail_indicators=[
                    "No documentation",
                    "Papers for different serial",
                    "Unknown service history",
                    "Gaps in ownership chain",
                ],
                weight=6,
            ),
        ],
    ),
]
