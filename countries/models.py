from django.db import models


class Country(models.Model):
    # name is the upsert key; exact, case-sensitive identity
    name = models.CharField(max_length=200, unique=True)
    capital = models.CharField(max_length=200, null=True, blank=True)
    region = models.CharField(max_length=100, null=True, blank=True)
    population = models.BigIntegerField()
    # first currency reported by the country source, if any
    currency_code = models.CharField(max_length=10, null=True, blank=True)
    # null when the rate table has no usable rate for currency_code
    exchange_rate = models.FloatField(null=True, blank=True)
    # null exactly when exchange_rate is null
    estimated_gdp = models.FloatField(null=True, blank=True, db_index=True)
    flag_url = models.URLField(max_length=500, null=True, blank=True)
    # shared by every row written in the same refresh
    last_refreshed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["id"]

    def __str__(self):
        return self.name
