import pytest

from src.personnel_hub.personnel_hub.common.pagination import PageRequest, paginate
from src.personnel_hub.personnel_hub.common.query import month_arg, year_arg
from src.personnel_hub.personnel_hub.core.exceptions import ValidationError


def test_paginate_slices_and_counts_pages():
    page = paginate(list(range(25)), PageRequest(page=3, limit=10), key="items")
    assert page == {"items": [20, 21, 22, 23, 24], "total": 25, "page": 3, "limit": 10, "total_pages": 3}


def test_paginate_empty_list():
    page = paginate([], PageRequest(), key="items")
    assert page["total"] == 0
    assert page["total_pages"] == 0


@pytest.mark.parametrize("args", [{"page": "0"}, {"limit": "101"}, {"page": "x"}])
def test_page_request_rejects_bad_args(args):
    with pytest.raises(ValidationError):
        PageRequest.from_args(args)


def test_year_and_month_args():
    assert year_arg({"year": "2025"}) == 2025
    assert year_arg({}, default_current=False) is None
    assert month_arg({"month": "12"}) == 12
    with pytest.raises(ValidationError):
        year_arg({"year": "1999"})
    with pytest.raises(ValidationError):
        month_arg({"month": "13"})
