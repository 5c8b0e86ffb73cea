"""Product DRF serializer for API output.

The serializer operates at the Interface layer (API Views) and only
renders products.  Input is validated by the Pydantic DTOs in
``dtos.py`` before it reaches the Service Layer.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.products.models import Product


class ProductSerializer(serializers.ModelSerializer):
    """Read-only representation of the Product resource."""

    size = serializers.ListField(child=serializers.CharField(), read_only=True)
    tag = serializers.ListField(child=serializers.CharField(), read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "title",
            "slug",
            "price",
            "description",
            "stock",
            "size",
            "gender",
            "tag",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
