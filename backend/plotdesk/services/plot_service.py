"""
Plot Service - create, edit, delete and search plot listings

Mutations follow one pipeline: validate the text fields, check the
(plot number, village) pair is unique, check and encode the image, derive
the price per sqft, persist, then invalidate the affected views.
"""
from typing import Any, Dict, List, Optional

from plotdesk.core.constants import Messages, PlotStatus, UPLOADED_IMAGE_HINT, Views
from plotdesk.core.exceptions import ConflictError, PlotNotFoundError, ValidationError
from plotdesk.core.logging_config import logger
from plotdesk.schemas import ActionState, Plot, PlotForm
from plotdesk.services.actions import action
from plotdesk.services.validation import (
    ImageUpload,
    encode_image,
    price_per_sqft,
    validate_form,
    validate_image,
)
from plotdesk.services.view_cache import ViewCache, view_cache
from plotdesk.storage.base import DataStore

IMAGE_FIELD = "imageUrl"
ANY_FACING = "All"


class PlotService:
    """Plot pipelines bound to a store"""

    def __init__(self, store: DataStore, cache: ViewCache = view_cache):
        self.store = store
        self.cache = cache

    # ========== Reads ==========

    async def get_plots(self) -> List[Plot]:
        """All plots, newest first"""
        cached = self.cache.get(Views.PLOTS)
        if cached is not None:
            return cached

        plots = list(reversed(await self.store.list(Plot)))
        self.cache.set(Views.PLOTS, plots)
        return plots

    async def get_plot(self, plot_id: str) -> Optional[Plot]:
        view = Views.plot(plot_id)
        cached = self.cache.get(view)
        if cached is not None:
            return cached

        plot = await self.store.get(Plot, plot_id)
        if plot is not None:
            self.cache.set(view, plot)
        return plot

    async def search_plots(
        self,
        term: Optional[str] = None,
        facing: Optional[str] = None,
        status: Optional[str] = None,
    ) -> List[Plot]:
        """
        Filter the plot list.

        The term matches area, village or plot number case-insensitively;
        a facing of "All" or nothing matches every plot, as does no status.
        """
        term = (term or "").strip().lower()
        facing = None if not facing or facing == ANY_FACING else facing

        plots = await self.get_plots()
        return [
            plot for plot in plots
            if (not term or any(term in value.lower() for value in (plot.area_name, plot.village_name, plot.plot_number)))
            and (facing is None or plot.plot_facing.value == facing)
            and (not status or plot.status.value == status)
        ]

    async def _is_duplicate(self, plot_number: str, village_name: str, exclude_id: Optional[str] = None) -> bool:
        number, village = plot_number.lower(), village_name.lower()
        return any(
            plot.plot_number.lower() == number
            and plot.village_name.lower() == village
            and plot.id != exclude_id
            for plot in await self.store.list(Plot)
        )

    # ========== Mutations ==========

    @action("create_plot")
    async def create_plot(self, fields: Dict[str, Any], image: Optional[ImageUpload]) -> ActionState:
        form, errors = validate_form(PlotForm, fields)
        if form is None:
            raise ValidationError(Messages.PLOT_CREATE_INVALID, errors)

        if image is None or image.size == 0:
            raise ValidationError(Messages.IMAGE_REQUIRED, {IMAGE_FIELD: [Messages.IMAGE_REQUIRED]})

        image_errors = validate_image(image)
        if image_errors:
            raise ValidationError(Messages.IMAGE_INVALID_CREATE, {IMAGE_FIELD: image_errors})

        async with self.store.lock(Plot):
            if await self._is_duplicate(form.plot_number, form.village_name):
                raise ConflictError(Messages.PLOT_EXISTS)

            data = form.model_dump(exclude={"status"})
            data.update(
                image_url=encode_image(image),
                image_hint=UPLOADED_IMAGE_HINT,
                price_per_sqft=price_per_sqft(form.price, form.plot_size),
                status=form.status or PlotStatus.AVAILABLE,
            )
            plot = await self.store.create(Plot, data)

        logger.info(f"[Plots] Created plot {plot.plot_number} ({plot.village_name}) as {plot.id}")
        self.cache.invalidate(Views.DASHBOARD, Views.PLOTS)
        return ActionState.ok(Messages.PLOT_CREATED, status_code=201, plot_id=plot.id)

    @action("update_plot")
    async def update_plot(
        self,
        plot_id: str,
        fields: Dict[str, Any],
        image: Optional[ImageUpload] = None,
    ) -> ActionState:
        form, errors = validate_form(PlotForm, fields)
        if form is None:
            raise ValidationError(Messages.PLOT_UPDATE_INVALID, errors)

        async with self.store.lock(Plot):
            if await self._is_duplicate(form.plot_number, form.village_name, exclude_id=plot_id):
                raise ConflictError(Messages.PLOT_EXISTS_OTHER)

            existing = await self.store.get(Plot, plot_id)
            if existing is None:
                raise PlotNotFoundError(plot_id)

            changes = form.model_dump(exclude={"status"})
            changes.update(
                price_per_sqft=price_per_sqft(form.price, form.plot_size),
                status=form.status or existing.status or PlotStatus.AVAILABLE,
            )

            # An empty file input means "keep the current image"
            if image is not None and image.size > 0:
                image_errors = validate_image(image)
                if image_errors:
                    raise ValidationError(Messages.IMAGE_INVALID_UPDATE, {IMAGE_FIELD: image_errors})
                changes.update(image_url=encode_image(image), image_hint=UPLOADED_IMAGE_HINT)

            updated = existing.model_copy(update=changes)
            if await self.store.update(updated) is None:
                raise PlotNotFoundError(plot_id)

        logger.info(f"[Plots] Updated plot {plot_id}")
        self.cache.invalidate(
            Views.DASHBOARD,
            Views.PLOTS,
            Views.plot(plot_id),
            Views.plot_edit(plot_id),
        )
        return ActionState.ok(Messages.PLOT_UPDATED, plot_id=plot_id)

    @action("delete_plot")
    async def delete_plot(self, plot_id: str) -> ActionState:
        async with self.store.lock(Plot):
            if not await self.store.delete(Plot, plot_id):
                raise PlotNotFoundError(plot_id)

        logger.info(f"[Plots] Deleted plot {plot_id}")
        self.cache.invalidate(
            Views.DASHBOARD,
            Views.PLOTS,
            Views.plot(plot_id),
            Views.plot_edit(plot_id),
        )
        return ActionState.ok(Messages.PLOT_DELETED)
