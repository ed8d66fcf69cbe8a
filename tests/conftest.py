import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture
def spring_sale_batch():
    return [
        {"platform": "Meta", "campaign_name": "Spring Sale", "product": "Sneakers", "variant": "A",
         "impressions": "10000", "clicks": "400", "conversions": "20", "spend": "800", "revenue": "2400"},
        {"platform": "Meta", "campaign_name": "Spring Sale", "product": "Sneakers", "variant": "B",
         "impressions": "9800", "clicks": "420", "conversions": "35", "spend": "820", "revenue": "3900"},
        {"platform": "Google", "campaign_name": "Brand Search", "product": "Sneakers",
         "impressions": "5000", "clicks": "250", "conversions": "12", "spend": "300", "revenue": "1500"},
        {"platform": "Google", "campaign_name": "Shopping", "product": "Boots",
         "impressions": "7000", "clicks": "140", "conversions": "7", "spend": "210", "revenue": "900"},
    ]
