"""
Our Corner - Views
==================

Pairing (invite codes), profile, and the shared corner canvas.

Every corner endpoint answers in one of three flavors:
1. HTMX request (HX-Request header) - the updated fragment
2. Browser form submit (Accept: text/html) - redirect back to the corner
3. Anything else (fetch / API) - JSON
"""

import json
import logging
from functools import wraps

from django.shortcuts import render, redirect
from django.contrib.auth.decorators import login_required
from django.contrib.auth import login, logout
from django.contrib.auth.forms import UserCreationForm, AuthenticationForm
from django.contrib import messages
from django.http import Http404, HttpResponse, JsonResponse
from django.views.decorators.http import require_http_methods

from .canvas import CornerCanvas
from .exceptions import CornerError, InvalidRequest
from .forms import ProfileForm, StartDateForm
from .models import Couple, Invite
from .transforms import color_to_hex

logger = logging.getLogger(__name__)


def _is_htmx(request):
    return bool(request.headers.get('HX-Request'))


def _wants_page(request):
    return 'text/html' in request.headers.get('Accept', '')


# =============================================================================
# HOME
# =============================================================================

def home(request):
    """Send people where they belong: their couple, or the login page."""
    if request.user.is_authenticated:
        return redirect('couple')
    return redirect('login')


# =============================================================================
# AUTHENTICATION
# =============================================================================

def login_view(request):
    """Handle user login."""
    if request.user.is_authenticated:
        return redirect('couple')

    if request.method == 'POST':
        form = AuthenticationForm(request, data=request.POST)
        if form.is_valid():
            login(request, form.get_user())
            return redirect('couple')
    else:
        form = AuthenticationForm()

    return render(request, 'auth/login.html', {'form': form})


def logout_view(request):
    """Handle user logout."""
    logout(request)
    return redirect('login')


def register_view(request):
    """Handle user registration, then send them off to find their partner."""
    if request.user.is_authenticated:
        return redirect('couple')

    if request.method == 'POST':
        form = UserCreationForm(request.POST)
        if form.is_valid():
            user = form.save()
            login(request, user)
            messages.success(request, 'Welcome! Invite your partner to get started.')
            return redirect('invite')
    else:
        form = UserCreationForm()

    return render(request, 'auth/register.html', {'form': form})


# =============================================================================
# COUPLE
# =============================================================================

@login_required
def couple_view(request):
    """Overview of the couple: partner, start date, links to the corner."""
    couple = Couple.get_couple_for_user(request.user)
    if not couple:
        return redirect('invite')

    context = {
        'couple': couple,
        'partner': couple.get_partner(request.user),
        'start_date_form': StartDateForm(initial={
            'start_date': couple.relationship_start_date.isoformat()
            if couple.relationship_start_date else ''
        }),
        'active_tab': 'couple',
    }
    return render(request, 'couple/index.html', context)


@login_required
@require_http_methods(['POST'])
def couple_start_date(request):
    """Save, change or clear the relationship start date. Returns JSON."""
    couple = Couple.get_couple_for_user(request.user)
    if not couple:
        return JsonResponse({'ok': False, 'error': 'not_paired'}, status=400)

    form = StartDateForm(request.POST)
    if not form.is_valid():
        return JsonResponse({'ok': False, 'error': 'invalid_date'}, status=400)

    start_date = form.cleaned_data['start_date']
    couple.relationship_start_date = start_date
    couple.save(update_fields=['relationship_start_date'])
    return JsonResponse({
        'ok': True,
        'start_date': start_date.isoformat() if start_date else None,
    })


# =============================================================================
# PAIRING - invite codes
# =============================================================================

@login_required
def invite_index(request):
    """The user's live invite codes."""
    context = {
        'invites': Invite.active_for(request.user),
        'couple': Couple.get_couple_for_user(request.user),
        'active_tab': 'couple',
    }
    return render(request, 'invite/index.html', context)


@login_required
@require_http_methods(['POST'])
def invite_create(request):
    """
    Issue a new invite code.
    HTMX gets the new code row; browsers go back to the invite page.
    """
    invite, error = Invite.issue(request.user)

    if error:
        if _is_htmx(request):
            return render(request, 'invite/_error.html', {'error': error}, status=400)
        messages.error(request, error)
        return redirect('invite')

    if _is_htmx(request):
        response = render(request, 'invite/_code_row.html', {'invite': invite})
        response['HX-Trigger'] = 'invite-created'
        return response

    messages.success(request, 'Invite created! Share the code with your partner.')
    return redirect('invite')


@login_required
def invite_detail(request, code):
    """A single invite row, for sharing or refreshing."""
    invite = Invite.objects.filter(code=code.upper(), issuer=request.user).first()
    if not invite:
        raise Http404('Invite not found')
    return render(request, 'invite/_code_row.html', {'invite': invite})


@login_required
def join_view(request):
    """Redeem a partner's invite code."""
    if request.method != 'POST':
        code = request.GET.get('code', '').strip().upper()
        return render(request, 'join/index.html', {'code': code, 'active_tab': 'couple'})

    code = request.POST.get('code', '')
    couple, error = Invite.redeem(request.user, code)

    if error:
        if _is_htmx(request):
            return render(request, 'invite/_error.html', {'error': error}, status=400)
        messages.error(request, error)
        return render(
            request,
            'join/index.html',
            {'code': code.strip().upper(), 'active_tab': 'couple'},
            status=400,
        )

    partner = couple.get_partner(request.user)
    if _is_htmx(request):
        response = HttpResponse('')
        response['HX-Redirect'] = '/couple/'
        return response

    messages.success(request, f'You are now connected with {partner.profile.name if partner else "your partner"}!')
    return redirect('couple')


# =============================================================================
# PROFILE
# =============================================================================

@login_required
def profile_view(request):
    """Display name and avatar."""
    profile = request.user.profile

    if request.method == 'POST':
        form = ProfileForm(request.POST, request.FILES, instance=profile)
        if form.is_valid():
            try:
                form.save()
            except Exception:
                # Cloudinary upload errors surface during model save (CloudinaryField.pre_save)
                logger.exception("Avatar upload failed for user %s", request.user.pk)
                messages.error(request, 'Profile update failed. Please try again.')
            else:
                messages.success(request, 'Profile updated!')
                if _is_htmx(request):
                    response = HttpResponse(status=204)
                    response['HX-Redirect'] = '/profile/'
                    return response
                return redirect('profile')
        else:
            messages.error(request, 'Could not update profile. Please fix the highlighted fields and try again.')
    else:
        form = ProfileForm(instance=profile)

    return render(request, 'profile/index.html', {'form': form, 'active_tab': 'profile'})


# =============================================================================
# CORNER - shared canvas
# =============================================================================

def _payload(request):
    """Request body as a mapping, from JSON or a form post."""
    if request.content_type == 'application/json':
        try:
            data = json.loads(request.body or b'{}')
        except ValueError:
            raise InvalidRequest('Malformed JSON body.')
        return data if isinstance(data, dict) else {}
    return request.POST


def _item_response(request, item, status=200):
    if _is_htmx(request):
        return render(request, 'corner/_item.html', {'item': item}, status=status)
    if _wants_page(request):
        return redirect('corner')
    return JsonResponse({'success': True, 'item': item.to_dict()}, status=status)


def _error_response(request, error):
    if _is_htmx(request):
        return render(request, 'corner/_error.html', {'error': error}, status=error.status)
    if _wants_page(request):
        messages.error(request, error.message)
        return redirect('corner')
    return JsonResponse(
        {'success': False, 'error': error.code, 'message': error.message},
        status=error.status,
    )


def corner_endpoint(view):
    """
    Wrap a canvas mutation: POST only, logged-in, paired.

    The wrapped view receives (request, canvas, data, **url_kwargs).
    Engine errors become a status code plus a fragment or JSON body.
    """
    @wraps(view)
    def wrapper(request, *args, **kwargs):
        try:
            canvas = CornerCanvas.for_user(request.user)
            return view(request, canvas, _payload(request), *args, **kwargs)
        except CornerError as error:
            logger.info(
                "Corner %s for user %s: %s", view.__name__, request.user.pk, error.code
            )
            return _error_response(request, error)

    return login_required(require_http_methods(['POST'])(wrapper))


@login_required
def corner_index(request):
    """The corner itself: every item, in render order, plus the room colors."""
    couple = Couple.get_couple_for_user(request.user)
    if not couple:
        return redirect('invite')

    canvas = CornerCanvas(couple)
    context = {
        'couple': couple,
        'items': canvas.items(),
        'colors': _colors_context(couple.corner_colors()),
        'active_tab': 'corner',
    }
    return render(request, 'corner/index.html', context)


@login_required
@require_http_methods(['GET'])
def corner_items(request):
    """All items as JSON, so each partner can pick up the other's edits."""
    couple = Couple.get_couple_for_user(request.user)
    if not couple:
        return JsonResponse({'success': False, 'error': 'not_paired'}, status=400)

    return JsonResponse({
        'success': True,
        'items': [item.to_dict() for item in CornerCanvas(couple).items()],
        'colors': couple.corner_colors(),
    })


@corner_endpoint
def item_create(request, canvas, data):
    item = canvas.place(
        data.get('item_key'),
        x=data.get('x', 50),
        y=data.get('y', 50),
        z=data.get('z', 0),
        rotation=data.get('rotation', 0),
        scale=data.get('scale', 1.0),
    )
    return _item_response(request, item, status=201)


@corner_endpoint
def item_delete(request, canvas, data, item_id):
    event = canvas.delete(item_id)

    if _is_htmx(request):
        response = HttpResponse('')
        response['HX-Trigger'] = event
        return response
    if _wants_page(request):
        return redirect('corner')
    return JsonResponse({'success': True, 'deleted': item_id, 'event': event})


@corner_endpoint
def item_nudge(request, canvas, data, item_id):
    item = canvas.nudge(item_id, dx=data.get('dx'), dy=data.get('dy'), drotation=data.get('drot'))
    return _item_response(request, item)


@corner_endpoint
def item_height(request, canvas, data, item_id):
    item = canvas.set_height(item_id, dz=data.get('dz'))
    return _item_response(request, item)


@corner_endpoint
def item_position(request, canvas, data, item_id):
    item = canvas.set_position(item_id, x=data.get('x'), y=data.get('y'))
    return _item_response(request, item)


@corner_endpoint
def item_scale(request, canvas, data, item_id):
    item = canvas.set_scale(item_id, scale=data.get('scale'))
    return _item_response(request, item)


@corner_endpoint
def item_layer(request, canvas, data, item_id):
    item = canvas.set_layer(item_id, layer=data.get('layer'))
    return _item_response(request, item)


@corner_endpoint
def item_stack(request, canvas, data, item_id):
    item = canvas.restack(item_id, direction=data.get('dir'))
    return _item_response(request, item)


@corner_endpoint
def item_tilt(request, canvas, data, item_id):
    item = canvas.set_tilt(item_id, tilt_x=data.get('tilt_x'), tilt_y=data.get('tilt_y'))
    return _item_response(request, item)


@corner_endpoint
def item_flip(request, canvas, data, item_id):
    item = canvas.set_flip(item_id, flip_x=data.get('flip_x'), flip_y=data.get('flip_y'))
    return _item_response(request, item)


@corner_endpoint
def item_color(request, canvas, data, item_id):
    item = canvas.set_color(item_id, color=data.get('color'))
    return _item_response(request, item)


def _colors_context(colors):
    return {key: color_to_hex(value) for key, value in colors.items()}


@corner_endpoint
def corner_colors(request, canvas, data):
    """Partial update of the canvas/floor/wall colors."""
    colors = canvas.set_colors(**{key: data.get(key) for key in Couple.CORNER_COLOR_FIELDS})

    if _is_htmx(request):
        return render(request, 'corner/_colors.html', {'colors': _colors_context(colors)})
    if _wants_page(request):
        return redirect('corner')
    return JsonResponse({'success': True, 'colors': colors})
