import django_filters
from .models import Order


class OrderFilter(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(choices=Order.Status.choices)
    paid = django_filters.BooleanFilter()

    class Meta:
        model = Order
        fields = ['status', 'paid']
