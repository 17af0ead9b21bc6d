"""
Our Corner - Corner Canvas Engine
=================================

Applies placement and transform operations to a couple's canvas items.

Every operation is scoped to one couple: an item id that belongs to another
couple is indistinguishable from one that doesn't exist. Both partners have
equal write access to every item.

Each mutation is a short transaction around a single row: the item is read
with SELECT ... FOR UPDATE, the new values are computed from the locked
row, and only the touched columns are written back. Concurrent edits by the
two partners therefore serialize in the database, last write wins per field.
There is no cross-item transaction.
"""

import logging

from django.db import transaction

from . import transforms
from .exceptions import InvalidRequest, ItemNotFound, NotPaired
from .models import CanvasItem, Couple

logger = logging.getLogger(__name__)

# Change-notification token sent to the client when an item disappears
ITEM_REMOVED_EVENT = 'itemRemoved'

ITEM_KEY_MAX_LENGTH = CanvasItem._meta.get_field('item_key').max_length


class CornerCanvas:
    """The set of items a couple has placed, and the operations on them."""

    def __init__(self, couple):
        if couple is None:
            raise NotPaired()
        self.couple = couple

    @classmethod
    def for_user(cls, user):
        """Resolve the user's couple, raising NotPaired if there is none."""
        return cls(Couple.get_couple_for_user(user))

    # =========================================================================
    # READS
    # =========================================================================

    def items(self):
        """Items in render order: ascending layer, then creation order."""
        return CanvasItem.objects.filter(couple=self.couple).order_by('layer', 'id')

    def get(self, item_id):
        try:
            return CanvasItem.objects.get(pk=item_id, couple=self.couple)
        except (CanvasItem.DoesNotExist, ValueError, TypeError):
            raise ItemNotFound()

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    def place(self, item_key, x=50, y=50, z=0, rotation=0, scale=1.0):
        """
        Place a new item. Missing values fall back to the center of the
        canvas with an identity transform; layer starts at 0, with no color.
        """
        if item_key is not None and not isinstance(item_key, str):
            raise InvalidRequest('item_key must be a string')
        item_key = (item_key or '').strip()
        if not item_key:
            raise InvalidRequest('item_key required')
        if len(item_key) > ITEM_KEY_MAX_LENGTH:
            raise InvalidRequest(f'item_key must be at most {ITEM_KEY_MAX_LENGTH} characters')

        # A zero or unparseable scale means "unscaled"
        raw_scale = transforms.coerce_number(scale, 1.0) or 1.0

        item = CanvasItem.objects.create(
            couple=self.couple,
            item_key=item_key,
            x=transforms.clamp_position(transforms.coerce_number(x, 50.0)),
            y=transforms.clamp_position(transforms.coerce_number(y, 50.0)),
            z=transforms.clamp_height(transforms.coerce_number(z, 0)),
            rotation=transforms.normalize_rotation(transforms.coerce_number(rotation, 0)),
            scale=transforms.clamp_scale(raw_scale),
            layer=0,
        )
        logger.info("Couple %s placed %s (item %s)", self.couple.pk, item.item_key, item.pk)
        return item

    def delete(self, item_id):
        """Remove an item permanently."""
        with transaction.atomic():
            item = self._locked(item_id)
            pk = item.pk
            item.delete()
        logger.info("Couple %s removed item %s", self.couple.pk, pk)
        return ITEM_REMOVED_EVENT

    # =========================================================================
    # RELATIVE TRANSFORMS
    # =========================================================================

    def nudge(self, item_id, dx=0, dy=0, drotation=0):
        """Move and/or rotate by deltas (drag and rotate handles)."""
        dx = transforms.coerce_number(dx)
        dy = transforms.coerce_number(dy)
        drotation = transforms.coerce_number(drotation)

        def apply(item):
            item.x = transforms.clamp_position(item.x + dx)
            item.y = transforms.clamp_position(item.y + dy)
            item.rotation = transforms.normalize_rotation(item.rotation + drotation)
            return ['x', 'y', 'rotation']

        return self._mutate(item_id, apply)

    def set_height(self, item_id, dz=0):
        """Raise or lower the item by dz height tiers."""
        dz = transforms.coerce_number(dz)

        def apply(item):
            item.z = transforms.clamp_height(item.z + dz)
            return ['z']

        return self._mutate(item_id, apply)

    def restack(self, item_id, direction=0):
        """
        Bring forward (+1) or send backward (-1) by one layer.

        Unlike set_layer this is not clamped, so repeated restacking can
        drift past +/-1000.
        """
        step = transforms.direction_of(direction)

        def apply(item):
            item.layer = item.layer + step
            return ['layer']

        return self._mutate(item_id, apply)

    # =========================================================================
    # ABSOLUTE TRANSFORMS
    # =========================================================================

    def set_position(self, item_id, x=None, y=None):
        """Drop the item at (x, y) percent; drag-and-drop end state."""
        x = transforms.clamp_position(transforms.coerce_number(x))
        y = transforms.clamp_position(transforms.coerce_number(y))

        def apply(item):
            item.x = x
            item.y = y
            return ['x', 'y']

        return self._mutate(item_id, apply)

    def set_scale(self, item_id, scale=None):
        scale = transforms.clamp_scale(transforms.coerce_number(scale, 1.0))

        def apply(item):
            item.scale = scale
            return ['scale']

        return self._mutate(item_id, apply)

    def set_layer(self, item_id, layer=None):
        layer = transforms.clamp_layer(transforms.coerce_number(layer, 0))

        def apply(item):
            item.layer = layer
            return ['layer']

        return self._mutate(item_id, apply)

    def set_tilt(self, item_id, tilt_x=None, tilt_y=None):
        tilt_x = transforms.clamp_tilt(transforms.coerce_number(tilt_x))
        tilt_y = transforms.clamp_tilt(transforms.coerce_number(tilt_y))

        def apply(item):
            item.tilt_x = tilt_x
            item.tilt_y = tilt_y
            return ['tilt_x', 'tilt_y']

        return self._mutate(item_id, apply)

    def set_flip(self, item_id, flip_x=None, flip_y=None):
        flip_x = transforms.coerce_flag(flip_x)
        flip_y = transforms.coerce_flag(flip_y)

        def apply(item):
            item.flip_x = flip_x
            item.flip_y = flip_y
            return ['flip_x', 'flip_y']

        return self._mutate(item_id, apply)

    def set_color(self, item_id, color=None):
        """Recolor the item. Anything that isn't a color clears it."""
        color = transforms.parse_color(color)

        def apply(item):
            item.color = color
            return ['color']

        return self._mutate(item_id, apply)

    # =========================================================================
    # COUPLE-WIDE PREFERENCES
    # =========================================================================

    def set_colors(self, **colors):
        """
        Update the canvas/floor/wall colors.

        Only keys that are present and parse to a color are written;
        everything else keeps its stored value.
        """
        updates = {}
        for key, field in Couple.CORNER_COLOR_FIELDS.items():
            parsed = transforms.parse_color(colors.get(key))
            if parsed is not None:
                updates[field] = parsed

        with transaction.atomic():
            couple = Couple.objects.select_for_update().get(pk=self.couple.pk)
            for field, value in updates.items():
                setattr(couple, field, value)
            if updates:
                couple.save(update_fields=list(updates))

        self.couple = couple
        return couple.corner_colors()

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _locked(self, item_id):
        try:
            return CanvasItem.objects.select_for_update().get(pk=item_id, couple=self.couple)
        except (CanvasItem.DoesNotExist, ValueError, TypeError):
            raise ItemNotFound()

    def _mutate(self, item_id, apply):
        with transaction.atomic():
            item = self._locked(item_id)
            fields = apply(item)
            item.save(update_fields=fields)
        return item
