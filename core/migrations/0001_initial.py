from django.conf import settings
import django.core.validators
from django.db import migrations, models
import django.db.models.deletion
import cloudinary.models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Couple',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('relationship_start_date', models.DateField(blank=True, help_text='When did your relationship start?', null=True)),
                ('corner_canvas_color', models.PositiveIntegerField(blank=True, null=True, validators=[django.core.validators.MaxValueValidator(16777215)])),
                ('corner_floor_color', models.PositiveIntegerField(blank=True, null=True, validators=[django.core.validators.MaxValueValidator(16777215)])),
                ('corner_wall_color', models.PositiveIntegerField(blank=True, null=True, validators=[django.core.validators.MaxValueValidator(16777215)])),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('partner1', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='couples_as_partner1', to=settings.AUTH_USER_MODEL)),
                ('partner2', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='couples_as_partner2', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Couple',
                'verbose_name_plural': 'Couples',
            },
        ),
        migrations.CreateModel(
            name='Profile',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('display_name', models.CharField(blank=True, help_text='Nickname shown to your partner (defaults to username)', max_length=60)),
                ('avatar', cloudinary.models.CloudinaryField(blank=True, help_text='Profile photo', max_length=255, null=True, verbose_name='avatar')),
                ('user', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='profile', to=settings.AUTH_USER_MODEL)),
            ],
        ),
        migrations.CreateModel(
            name='Invite',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('code', models.CharField(help_text='Share this code with your partner to join', max_length=16, unique=True)),
                ('expires_at', models.DateTimeField(db_index=True)),
                ('used_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('created_couple', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='invites', to='core.couple')),
                ('issuer', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='invites_issued', to=settings.AUTH_USER_MODEL)),
                ('used_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='invites_redeemed', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Invite',
                'verbose_name_plural': 'Invites',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='CanvasItem',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('item_key', models.CharField(help_text="Which decorative asset this is (e.g. 'lamp', 'plant')", max_length=64)),
                ('x', models.FloatField(default=50.0, help_text='Horizontal position, percent of canvas width', validators=[django.core.validators.MinValueValidator(0.0), django.core.validators.MaxValueValidator(100.0)])),
                ('y', models.FloatField(default=50.0, help_text='Vertical position, percent of canvas height', validators=[django.core.validators.MinValueValidator(0.0), django.core.validators.MaxValueValidator(100.0)])),
                ('z', models.IntegerField(default=0, help_text='Height tier', validators=[django.core.validators.MinValueValidator(0), django.core.validators.MaxValueValidator(20)])),
                ('rotation', models.IntegerField(default=0, help_text='Degrees, 0-359', validators=[django.core.validators.MinValueValidator(0), django.core.validators.MaxValueValidator(359)])),
                ('scale', models.FloatField(default=1.0, validators=[django.core.validators.MinValueValidator(0.25), django.core.validators.MaxValueValidator(2.0)])),
                ('layer', models.IntegerField(db_index=True, default=0, help_text='Stacking order; higher draws on top')),
                ('tilt_x', models.FloatField(default=0.0)),
                ('tilt_y', models.FloatField(default=0.0)),
                ('flip_x', models.BooleanField(default=False)),
                ('flip_y', models.BooleanField(default=False)),
                ('color', models.PositiveIntegerField(blank=True, help_text='Optional fill color (0xRRGGBB) for colorable items', null=True, validators=[django.core.validators.MaxValueValidator(16777215)])),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('couple', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='canvas_items', to='core.couple')),
            ],
            options={
                'verbose_name': 'Canvas item',
                'verbose_name_plural': 'Canvas items',
                'ordering': ['layer', 'id'],
                'indexes': [models.Index(fields=['couple', 'layer'], name='canvasitem_couple_layer_idx')],
            },
        ),
    ]
