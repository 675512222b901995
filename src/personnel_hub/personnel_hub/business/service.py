from __future__ import annotations

from typing import Any, Dict, Mapping

from ..common.datetime_utils import now_utc
from ..common.patching import apply_patch, changes
from ..common.validators import optional_text, require_email, require_length, require_pattern
from ..core.exceptions import NotFoundError, ValidationError
from ..security.policy import Action, authorize
from ..security.tenancy import Caller
from .model import Business, BusinessPatch
from .repository import BusinessRepository


def parse_business_patch(data: Mapping[str, Any]) -> BusinessPatch:
    if not isinstance(data, Mapping):
        raise ValidationError("Request body must be a JSON object")
    values: Dict[str, Any] = {}
    if data.get("name") is not None:
        values["name"] = require_length(data["name"], "Business name", 2, 150)
    if data.get("address") is not None:
        values["address"] = optional_text(data["address"], "Address", max_len=500)
    if data.get("phone") is not None:
        values["phone"] = optional_text(data["phone"], "Phone", max_len=40)
    if data.get("email") is not None:
        values["email"] = require_email(data["email"])
    if data.get("logo_url") is not None:
        values["logo_url"] = require_pattern(data["logo_url"], "Logo URL", r"https?://\S+", "must be a valid URL")
    return BusinessPatch(**values)


class BusinessService:
    def __init__(self, businesses: BusinessRepository):
        self._businesses = businesses

    def get_my_business(self, caller: Caller) -> Business:
        business = self._businesses.get_by_id(caller.business_id) if caller.business_id else None
        if not business:
            raise NotFoundError("Business not found")
        return business

    def get_business(self, caller: Caller, business_id: str) -> Business:
        # Only the caller's own business is visible.
        if business_id != caller.business_id:
            raise NotFoundError("Business not found")
        return self.get_my_business(caller)

    def update_my_business(self, caller: Caller, patch: BusinessPatch) -> Business:
        authorize(caller, Action.MANAGE_BUSINESS)
        if not changes(patch):
            raise ValidationError("No valid fields to update")
        business = self.get_my_business(caller)
        return self._businesses.update(apply_patch(business, patch, updated_at=now_utc()))
