"""
Our Corner - Data Models
========================

Couples, the invites that pair them, and the decorative items they place
in their shared corner.

A couple is two optional partner slots. Everything a couple owns is scoped
by couple_id, and both partners have equal access to all of it.
"""

import logging
import secrets
from datetime import timedelta

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models, transaction
from django.utils import timezone
from cloudinary.models import CloudinaryField

from . import transforms

logger = logging.getLogger(__name__)


class Profile(models.Model):
    """
    Extends Django's User with what your partner sees of you.

    Created automatically when a User is created via signals.
    """
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='profile'
    )
    display_name = models.CharField(
        max_length=60,
        blank=True,
        help_text="Nickname shown to your partner (defaults to username)"
    )
    avatar = CloudinaryField(
        'avatar',
        blank=True,
        null=True,
        help_text="Profile photo"
    )

    def __str__(self):
        return f"Profile: {self.user.username}"

    @property
    def name(self):
        """Returns display_name if set, otherwise username."""
        return self.display_name or self.user.username


class Couple(models.Model):
    """
    Pairs two users together as a couple.

    Both partner slots are optional so a couple can outlive a deleted
    account, but a pairing always fills both at creation time.
    """
    partner1 = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='couples_as_partner1'
    )
    partner2 = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='couples_as_partner2'
    )

    relationship_start_date = models.DateField(
        null=True,
        blank=True,
        help_text="When did your relationship start?"
    )

    # Corner-wide color preferences (0xRRGGBB). Null means "use the default".
    corner_canvas_color = models.PositiveIntegerField(
        null=True,
        blank=True,
        validators=[MaxValueValidator(transforms.COLOR_MAX)],
    )
    corner_floor_color = models.PositiveIntegerField(
        null=True,
        blank=True,
        validators=[MaxValueValidator(transforms.COLOR_MAX)],
    )
    corner_wall_color = models.PositiveIntegerField(
        null=True,
        blank=True,
        validators=[MaxValueValidator(transforms.COLOR_MAX)],
    )

    created_at = models.DateTimeField(auto_now_add=True)

    # Request field name -> column, for the corner color preferences
    CORNER_COLOR_FIELDS = {
        'canvas': 'corner_canvas_color',
        'floor': 'corner_floor_color',
        'wall': 'corner_wall_color',
    }

    class Meta:
        verbose_name = 'Couple'
        verbose_name_plural = 'Couples'

    def __str__(self):
        names = [u.username for u in (self.partner1, self.partner2) if u is not None]
        if len(names) == 2:
            return f"{names[0]} & {names[1]}"
        if names:
            return f"{names[0]} (waiting for partner)"
        return f"Couple #{self.pk}"

    @property
    def is_complete(self):
        return self.partner1_id is not None and self.partner2_id is not None

    def includes_user(self, user):
        """Check if this couple includes the given user."""
        return user.pk is not None and user.pk in (self.partner1_id, self.partner2_id)

    def slot_for(self, user):
        """Which partner slot ('partner1' or 'partner2') the user occupies, if any."""
        slots = {self.partner1_id: 'partner1', self.partner2_id: 'partner2'}
        slots.pop(None, None)
        return slots.get(user.pk)

    def get_partner(self, user):
        """Given one user, return their partner."""
        other = {'partner1': 'partner2', 'partner2': 'partner1'}.get(self.slot_for(user))
        return getattr(self, other) if other else None

    def corner_colors(self):
        """The corner color preferences as {'canvas': int|None, ...}."""
        return {
            key: getattr(self, field)
            for key, field in self.CORNER_COLOR_FIELDS.items()
        }

    @classmethod
    def get_couple_for_user(cls, user):
        """Get the couple that includes this user."""
        if user is None or user.pk is None:
            return None
        return cls.objects.filter(
            models.Q(partner1=user) | models.Q(partner2=user)
        ).first()


class Invite(models.Model):
    """
    A single-use, time-limited code that pairs two accounts.

    The issuer shares the code; whoever redeems it becomes their partner.
    """
    ALPHABET = 'ABCDEFGHJKLMNPQRSTUVWXYZ23456789'
    CODE_LENGTH = 8

    code = models.CharField(
        max_length=16,
        unique=True,
        help_text="Share this code with your partner to join"
    )
    issuer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='invites_issued'
    )
    expires_at = models.DateTimeField(db_index=True)

    used_at = models.DateTimeField(null=True, blank=True)
    used_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='invites_redeemed'
    )
    created_couple = models.ForeignKey(
        Couple,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='invites'
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']
        verbose_name = 'Invite'
        verbose_name_plural = 'Invites'

    def __str__(self):
        return f"{self.code} ({self.issuer.username})"

    def save(self, *args, **kwargs):
        if not self.code:
            self.code = self.generate_code()
        if not self.expires_at:
            self.expires_at = timezone.now() + timedelta(hours=settings.INVITE_TTL_HOURS)
        super().save(*args, **kwargs)

    @classmethod
    def generate_code(cls):
        while True:
            code = ''.join(secrets.choice(cls.ALPHABET) for _ in range(cls.CODE_LENGTH))
            if not cls.objects.filter(code=code).exists():
                return code

    @property
    def is_expired(self):
        return self.expires_at <= timezone.now()

    @property
    def is_used(self):
        return self.used_at is not None

    @classmethod
    def active_for(cls, user):
        """Unused, unexpired invites issued by this user, newest first."""
        return cls.objects.filter(
            issuer=user,
            used_at__isnull=True,
            expires_at__gt=timezone.now(),
        ).order_by('-created_at')

    @classmethod
    def issue(cls, user):
        """
        Issue a fresh invite code.
        Returns (invite, error_message).
        """
        couple = Couple.get_couple_for_user(user)
        # A couple whose partner account is gone can invite a new partner
        if couple is not None and couple.is_complete:
            return None, "You're already in a couple and can't create new invites."
        invite = cls.objects.create(issuer=user)
        logger.info("Invite %s issued by user %s", invite.code, user.pk)
        return invite, None

    @classmethod
    def redeem(cls, user, code):
        """
        Join the issuer's couple using an invite code.
        Returns (couple, error_message).
        """
        code = (code or '').strip().upper()

        if Couple.get_couple_for_user(user):
            return None, "You're already in a couple."

        with transaction.atomic():
            invite = cls.objects.select_for_update().filter(code=code).first()
            if invite is None:
                return None, "Invalid code."
            if invite.is_used:
                return None, "This code has already been used."
            if invite.is_expired:
                return None, "This code has expired."
            if invite.issuer_id == user.pk:
                return None, "You can't use your own code."

            couple = Couple.objects.select_for_update().filter(
                models.Q(partner1=invite.issuer) | models.Q(partner2=invite.issuer)
            ).first()
            if couple is not None and couple.is_complete:
                return None, "Invalid invite: the issuer is already paired."

            if couple is None:
                couple = Couple.objects.create(partner1=invite.issuer, partner2=user)
            elif couple.partner2_id is None:
                couple.partner2 = user
                couple.save(update_fields=['partner2'])
            else:
                couple.partner1 = user
                couple.save(update_fields=['partner1'])

            invite.used_at = timezone.now()
            invite.used_by = user
            invite.created_couple = couple
            invite.save(update_fields=['used_at', 'used_by', 'created_couple'])

        logger.info("Couple %s formed via invite %s", couple.pk, invite.code)
        return couple, None


class CanvasItem(models.Model):
    """
    One decorative item placed in a couple's corner.

    Position is in percent of the canvas, so it survives any screen size.
    Items render by ascending layer, with creation order breaking ties.
    """
    couple = models.ForeignKey(
        Couple,
        on_delete=models.CASCADE,
        related_name='canvas_items'
    )
    item_key = models.CharField(
        max_length=64,
        help_text="Which decorative asset this is (e.g. 'lamp', 'plant')"
    )

    x = models.FloatField(
        default=50.0,
        validators=[MinValueValidator(0.0), MaxValueValidator(100.0)],
        help_text="Horizontal position, percent of canvas width"
    )
    y = models.FloatField(
        default=50.0,
        validators=[MinValueValidator(0.0), MaxValueValidator(100.0)],
        help_text="Vertical position, percent of canvas height"
    )
    z = models.IntegerField(
        default=0,
        validators=[MinValueValidator(transforms.HEIGHT_MIN), MaxValueValidator(transforms.HEIGHT_MAX)],
        help_text="Height tier"
    )
    rotation = models.IntegerField(
        default=0,
        validators=[MinValueValidator(0), MaxValueValidator(transforms.FULL_TURN - 1)],
        help_text="Degrees, 0-359"
    )
    scale = models.FloatField(
        default=1.0,
        validators=[MinValueValidator(transforms.SCALE_MIN), MaxValueValidator(transforms.SCALE_MAX)],
    )
    layer = models.IntegerField(
        default=0,
        db_index=True,
        help_text="Stacking order; higher draws on top"
    )

    # Skew in degrees. tilt_x leans along the X axis (CSS skewY), tilt_y along Y (skewX).
    tilt_x = models.FloatField(default=0.0)
    tilt_y = models.FloatField(default=0.0)
    flip_x = models.BooleanField(default=False)
    flip_y = models.BooleanField(default=False)

    color = models.PositiveIntegerField(
        null=True,
        blank=True,
        validators=[MaxValueValidator(transforms.COLOR_MAX)],
        help_text="Optional fill color (0xRRGGBB) for colorable items"
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['layer', 'id']
        verbose_name = 'Canvas item'
        verbose_name_plural = 'Canvas items'
        indexes = [
            models.Index(fields=['couple', 'layer'], name='canvasitem_couple_layer_idx'),
        ]

    def __str__(self):
        return f"{self.item_key} @ ({self.x:g}, {self.y:g})"

    @property
    def color_hex(self):
        return transforms.color_to_hex(self.color)

    @property
    def css_transform(self):
        """CSS transform string for rendering the item in place."""
        sx = -self.scale if self.flip_x else self.scale
        sy = -self.scale if self.flip_y else self.scale
        return (
            f"translate(-50%, -50%) rotate({self.rotation}deg) "
            f"skew({self.tilt_y:g}deg, {self.tilt_x:g}deg) scale({sx:g}, {sy:g})"
        )

    def to_dict(self):
        return {
            'id': self.pk,
            'item_key': self.item_key,
            'x': self.x,
            'y': self.y,
            'z': self.z,
            'rotation': self.rotation,
            'scale': self.scale,
            'layer': self.layer,
            'tilt_x': self.tilt_x,
            'tilt_y': self.tilt_y,
            'flip_x': self.flip_x,
            'flip_y': self.flip_y,
            'color': self.color,
            'color_hex': self.color_hex,
        }
