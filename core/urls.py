"""
Our Corner - Core URL Configuration
"""

from django.urls import path
from . import views

urlpatterns = [
    path('', views.home, name='home'),

    # Auth
    path('login/', views.login_view, name='login'),
    path('logout/', views.logout_view, name='logout'),
    path('register/', views.register_view, name='register'),
    path('profile/', views.profile_view, name='profile'),

    # Couple pairing
    path('couple/', views.couple_view, name='couple'),
    path('couple/start-date/', views.couple_start_date, name='couple_start_date'),
    path('invite/', views.invite_index, name='invite'),
    path('invite/create/', views.invite_create, name='invite_create'),
    path('invite/<str:code>/', views.invite_detail, name='invite_detail'),
    path('join/', views.join_view, name='join'),

    # Corner
    path('corner/', views.corner_index, name='corner'),
    path('corner/items/', views.corner_items, name='corner_items'),
    path('corner/items/create/', views.item_create, name='corner_item_create'),
    path('corner/items/<int:item_id>/delete/', views.item_delete, name='corner_item_delete'),
    path('corner/items/<int:item_id>/nudge/', views.item_nudge, name='corner_item_nudge'),
    path('corner/items/<int:item_id>/height/', views.item_height, name='corner_item_height'),
    path('corner/items/<int:item_id>/position/', views.item_position, name='corner_item_position'),
    path('corner/items/<int:item_id>/scale/', views.item_scale, name='corner_item_scale'),
    path('corner/items/<int:item_id>/layer/', views.item_layer, name='corner_item_layer'),
    path('corner/items/<int:item_id>/stack/', views.item_stack, name='corner_item_stack'),
    path('corner/items/<int:item_id>/tilt/', views.item_tilt, name='corner_item_tilt'),
    path('corner/items/<int:item_id>/flip/', views.item_flip, name='corner_item_flip'),
    path('corner/items/<int:item_id>/color/', views.item_color, name='corner_item_color'),
    path('corner/colors/', views.corner_colors, name='corner_colors'),
]
