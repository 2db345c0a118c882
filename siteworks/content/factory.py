"""
Siteworks - Content Factory

Creates and initializes site content from a SiteType definition.

Initialization only fills in what is missing: regions that already hold
a value are left untouched, so loading persisted content through the
factory never overwrites stored data.
"""

import logging
import types
from typing import Any, TypeVar, Union, get_args, get_origin

from pydantic import BaseModel

from ..models import DYNAMIC, DynamicSiteContent, RegionType, SiteContent, SiteContentBase, SiteType

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=SiteContentBase)

# Initial value per field type; unknown field types start as None
FIELD_DEFAULTS: dict[str, Any] = {
    "string": "",
    "text": "",
    "html": "",
    "markdown": "",
    "checkbox": False,
}


def _unwrap_optional(annotation: Any) -> Any:
    if get_origin(annotation) in (Union, types.UnionType):
        args = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


class ContentFactory:
    """Builds site content instances shaped by their site type."""

    def __init__(self, field_defaults: dict[str, Any] | None = None) -> None:
        self._field_defaults = dict(FIELD_DEFAULTS)
        if field_defaults:
            self._field_defaults.update(field_defaults)

    def create(self, model_cls: type[T], site_type: SiteType) -> T:
        """
        Create a new content instance of the given class for a site type.

        Args:
            model_cls: SiteContent subclass or DynamicSiteContent
            site_type: Definition the instance is shaped by

        Returns:
            The initialized instance with `type_id` set
        """
        model = model_cls(type_id=site_type.id)
        return self.initialize(model, site_type)

    def initialize(self, model: T, site_type: SiteType | None) -> T:
        """Initialize a model along the path selected by its `kind` tag."""
        if site_type is None:
            logger.debug(
                "No site type registered for content, skipping initialization",
                extra={"type_id": model.type_id},
            )
            return model

        if model.kind == DYNAMIC:
            return self.init_dynamic(model, site_type)  # type: ignore[arg-type,return-value]
        return self.init(model, site_type)  # type: ignore[arg-type,return-value]

    def init(self, model: SiteContent, site_type: SiteType) -> SiteContent:
        """Fill empty region attributes of statically typed content."""
        fields = type(model).model_fields

        for region in site_type.regions:
            if region.id not in fields:
                logger.debug(
                    f"Region '{region.id}' not declared on {type(model).__name__}",
                    extra={"type_id": site_type.id, "region": region.id},
                )
                continue

            if getattr(model, region.id) is None:
                setattr(model, region.id, self._create_static_region(fields[region.id].annotation, region))

        return model

    def init_dynamic(self, model: DynamicSiteContent, site_type: SiteType) -> DynamicSiteContent:
        """Materialize every region of the site type in `model.regions`."""
        for region in site_type.regions:
            if region.id not in model.regions:
                model.regions[region.id] = self._create_dynamic_region(region)
        return model

    def _field_values(self, region: RegionType) -> dict[str, Any]:
        return {field.id: self._field_defaults.get(field.type) for field in region.fields}

    def _create_dynamic_region(self, region: RegionType) -> Any:
        if region.collection:
            return []

        values = self._field_values(region)
        # Single-field regions hold the field value directly
        if len(region.fields) == 1:
            return values[region.fields[0].id]
        return values

    def _create_static_region(self, annotation: Any, region: RegionType) -> Any:
        region_cls = _unwrap_optional(annotation)
        origin = get_origin(region_cls)

        if region.collection or origin is list:
            return []

        values = self._field_values(region)

        if origin is None and isinstance(region_cls, type) and issubclass(region_cls, BaseModel):
            return region_cls.model_validate(
                {key: value for key, value in values.items() if key in region_cls.model_fields and value is not None}
            )

        if len(region.fields) == 1:
            return values[region.fields[0].id]
        return values
