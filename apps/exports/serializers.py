from rest_framework import serializers


class GoogleSheetsSyncSerializer(serializers.Serializer):
    """Input for pushing a project to Google Sheets."""
    spreadsheet_id = serializers.CharField(max_length=200)

    def validate_spreadsheet_id(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Spreadsheet ID is required")
        return value


class GoogleSheetsSyncResultSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    message = serializers.CharField()
    updated_sheets = serializers.ListField(child=serializers.CharField())
