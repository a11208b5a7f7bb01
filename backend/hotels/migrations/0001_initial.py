import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Facility",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=60, unique=True)),
            ],
            options={
                "ordering": ["name"],
                "verbose_name_plural": "facilities",
            },
        ),
        migrations.CreateModel(
            name="Hotel",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=200)),
                ("city", models.CharField(max_length=120)),
                ("country", models.CharField(max_length=120)),
                ("description", models.TextField()),
                (
                    "type",
                    models.CharField(
                        choices=[
                            ("Budget", "Budget"),
                            ("Boutique", "Boutique"),
                            ("Luxury", "Luxury"),
                            ("Ski Resort", "Ski Resort"),
                            ("Business", "Business"),
                            ("Family", "Family"),
                            ("Romantic", "Romantic"),
                            ("Hiking Resort", "Hiking Resort"),
                            ("Cabin", "Cabin"),
                            ("Beach Resort", "Beach Resort"),
                            ("Golf Resort", "Golf Resort"),
                            ("Motel", "Motel"),
                            ("All Inclusive", "All Inclusive"),
                            ("Pet Friendly", "Pet Friendly"),
                            ("Self Catering", "Self Catering"),
                        ],
                        max_length=30,
                    ),
                ),
                ("adult_count", models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1)])),
                ("child_count", models.PositiveIntegerField(default=0)),
                (
                    "price_per_night",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(0)],
                    ),
                ),
                (
                    "star_rating",
                    models.PositiveSmallIntegerField(
                        validators=[
                            django.core.validators.MinValueValidator(1),
                            django.core.validators.MaxValueValidator(5),
                        ]
                    ),
                ),
                ("image_urls", models.JSONField(blank=True, default=list)),
                ("last_updated", models.DateTimeField(auto_now=True)),
                (
                    "owner",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="hotels",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                ("facilities", models.ManyToManyField(blank=True, related_name="hotels", to="hotels.facility")),
            ],
            options={
                "ordering": ["-last_updated", "id"],
            },
        ),
    ]
