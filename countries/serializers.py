from rest_framework import serializers
from .models import Country


class CountrySerializer(serializers.ModelSerializer):
    class Meta:
        model = Country
        fields = [
            'id', 'name', 'capital', 'region', 'population',
            'currency_code', 'exchange_rate', 'estimated_gdp',
            'flag_url', 'last_refreshed_at'
        ]
        read_only_fields = fields


class SourceCurrencySerializer(serializers.Serializer):
    code = serializers.CharField(required=False, allow_null=True, allow_blank=True, max_length=10)


class SourceCountrySerializer(serializers.Serializer):
    """
    Schema of one entry from the country source.

    - name and a non-zero population are required
    - everything else is optional passthrough
    - an entry that does not match is skipped by the joiner, never fatal
    """
    name = serializers.CharField(max_length=200, trim_whitespace=False)
    population = serializers.IntegerField(min_value=-2**63, max_value=2**63 - 1)
    capital = serializers.CharField(required=False, allow_null=True, allow_blank=True, max_length=200)
    region = serializers.CharField(required=False, allow_null=True, allow_blank=True, max_length=100)
    flag = serializers.CharField(required=False, allow_null=True, allow_blank=True, max_length=500)
    currencies = SourceCurrencySerializer(many=True, required=False, allow_null=True)

    def validate_population(self, value):
        if not value:
            raise serializers.ValidationError("is required")
        return value
