"""
Our Corner - Forms
"""

from django import forms
from .models import Profile


class ProfileForm(forms.ModelForm):
    """Form for editing how your partner sees you."""

    class Meta:
        model = Profile
        fields = ['display_name', 'avatar']
        widgets = {
            'display_name': forms.TextInput(attrs={
                'placeholder': 'How should your partner see you?',
                'class': 'w-full px-4 py-3 text-stone-800 bg-stone-50 border border-stone-200 rounded-xl focus:ring-2 focus:ring-rose-400 transition-colors',
            }),
            'avatar': forms.FileInput(attrs={
                'class': 'sr-only',
                'accept': '.png,.jpg,.jpeg,.gif,.webp',
            }),
        }
        labels = {
            'display_name': 'Display Name',
            'avatar': 'Profile Photo',
        }

    def clean_display_name(self):
        return (self.cleaned_data.get('display_name') or '').strip()[:60]

    def clean_avatar(self):
        # No new upload keeps the current photo
        return self.cleaned_data.get('avatar') or self.instance.avatar


class StartDateForm(forms.Form):
    """
    Relationship start date, as YYYY-MM-DD or DD/MM/YYYY.
    An empty value clears the date.
    """
    start_date = forms.DateField(
        required=False,
        input_formats=['%Y-%m-%d', '%d/%m/%Y'],
        error_messages={'invalid': 'invalid_date'},
    )
