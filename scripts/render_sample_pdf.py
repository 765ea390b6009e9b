"""Render sample inquiry PDFs with every strategy.
Used for checking document layout during development.
"""

import asyncio
import os
import sys
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.config import get_settings
from app.deps import build_pdf_renderer

SAMPLE_FORM = {
    "Customer Name": "Jane Doe",
    "Customer Email": "jane.doe@example.com",
    "Customer Contact": "+1 555 123 4567",
    "Customer Nationality": "Canadian",
    "Customer Country": "Canada",
    "Arrival Flight": "UL 225",
    "Departure Flight": "UL 226",
    "Arrival Date": "2025-03-10",
    "Departure Date": "2025-03-17",
    "No. of Nights": "7",
    "Hotel Category": "4 Star",
    "Room Selection": [
        {"category": "Standard", "type": "DBL", "quantity": 2},
        {"category": "Deluxe", "type": "SGL", "quantity": 1},
    ],
    "Basis": "HB",
    "No of pax": "5",
    "Children": "5 to 11.9",
    "Tour type": "Round trip",
    "Transport": "Van",
    "Site / Interests": ["Culture", "Wildlife", "Sun & Sea"],
    "Other service": ["Jeep 4x4", "Train Rides"],
    "Special Arrangements": "Anniversary",
    "Special Arrangements Date": "2025-03-14",
}

SAMPLE_DATES = {
    "Arrival Date": "2025-03-10",
    "Departure Date": "2025-03-17",
    "Special Arrangements Date": "2025-03-14",
}


async def render_samples(output_dir: str) -> None:
    """Write one sample PDF per strategy into output_dir."""
    settings = get_settings()
    os.makedirs(output_dir, exist_ok=True)

    for strategy in ("html", "vector"):
        renderer = build_pdf_renderer(settings, strategy)
        pdf_bytes = await renderer.render(SAMPLE_FORM, SAMPLE_DATES)
        path = os.path.join(output_dir, f"sample-inquiry-{strategy}.pdf")
        with open(path, "wb") as f:
            f.write(pdf_bytes)
        print(f"Wrote {path} ({len(pdf_bytes)} bytes)")


if __name__ == "__main__":
    target = sys.argv[1] if len(sys.argv) > 1 else "sample_pdfs"
    asyncio.run(render_samples(target))
