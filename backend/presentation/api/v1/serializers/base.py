"""
Base Serializers.

Common serializer helpers.
"""

from rest_framework import serializers


class RecursiveSerializer(serializers.Serializer):
    """
    Serializer for recursive tree structures.

    Used as ``children = RecursiveSerializer(many=True)``: the enclosing
    serializer class is found through the list serializer wrapping it.
    """

    def _tree_serializer_class(self):
        return self.parent.parent.__class__

    def to_representation(self, instance):
        serializer = self._tree_serializer_class()(instance, context=self.context)
        return serializer.data

    def to_internal_value(self, data):
        serializer = self._tree_serializer_class()(data=data, context=self.context)
        serializer.is_valid(raise_exception=True)
        return serializer.validated_data
