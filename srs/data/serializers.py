from rest_framework import serializers

from ..domain.state import SETTINGS_ALIASES


class DeckSettingsSerializer(serializers.Serializer):
    learningSteps = serializers.ListField(
        child=serializers.FloatField(min_value=0), allow_empty=True, required=False
    )  # minutes
    graduatingInterval = serializers.FloatField(min_value=0, required=False)  # days
    easyInterval = serializers.FloatField(min_value=0, required=False)  # days

    def to_internal_value(self, data):
        # accept snake_case keys as well as the stored camelCase form
        if hasattr(data, "items"):
            reverse = {snake: camel for camel, snake in SETTINGS_ALIASES.items()}
            data = {reverse.get(k, k): v for k, v in data.items()}
        return super().to_internal_value(data)
