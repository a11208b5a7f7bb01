from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    """Account used both by guests booking stays and by hotel owners."""

    email = models.EmailField(unique=True)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
