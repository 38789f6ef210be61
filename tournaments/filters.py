import django_filters

from .models import Tournament


class TournamentFilter(django_filters.FilterSet):
    title = django_filters.CharFilter(lookup_expr="icontains")
    status = django_filters.ChoiceFilter(
        choices=Tournament.Status.choices, method="filter_by_status"
    )
    ordering = django_filters.OrderingFilter(
        fields=(
            ("start_time", "start_time"),
            ("entry_fee", "entry_fee"),
            ("prize_pool", "prize_pool"),
        )
    )

    class Meta:
        model = Tournament
        fields = {
            "game": ["exact"],
            "game_mode": ["exact"],
            "start_time": ["gte", "lte"],
        }

    def filter_by_status(self, queryset, name, value):
        return queryset.by_status(value)
