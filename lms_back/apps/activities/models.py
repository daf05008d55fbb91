from django.conf import settings
from django.db import models

from .configs import config_variant, parse_activity_config


class Activity(models.Model):
    """
    A unit of course content (video, reading, quiz, assignment link, ...)

    ``config`` is validated against the schema of ``kind`` on the way in;
    kinds without a schema keep their JSON as-is.
    """

    kind = models.CharField(max_length=50, db_index=True)
    title = models.CharField(max_length=200)
    description = models.TextField(blank=True, default='')
    is_hidden = models.BooleanField(default=False)
    order = models.IntegerField(default=0)
    config = models.JSONField(default=dict, blank=True)

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='activities',
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['order', 'id']

    def __str__(self):
        return f"[{self.kind}] {self.title}"

    @property
    def variant(self):
        return config_variant(self.kind)

    @property
    def typed_config(self):
        return parse_activity_config(self.kind, self.config)
