from django.db import models


# Navigation menu item (parent-child structure, sibling order)
class MenuItem(models.Model):
    id = models.BigAutoField(primary_key=True)
    name = models.CharField(max_length=255)
    url = models.CharField(max_length=500, blank=True, default="")
    icon = models.CharField(max_length=50, blank=True, default="")

    # no DB constraint: imported rows may point at a parent that no longer exists,
    # the tree builder promotes those to root instead of failing
    parent = models.ForeignKey(
        "self",
        related_name="children",
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        blank=True,
        null=True,
    )

    # order within the same parent (top level uses parent=NULL); not unique
    order = models.IntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["order", "id"]

    def __str__(self):
        return self.name
