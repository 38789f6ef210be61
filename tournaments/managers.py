from django.db import models


class TournamentQuerySet(models.QuerySet):
    def with_details(self, user=None):
        """
        Annotates the queryset with user-specific information: whether the
        given user is registered for each tournament.
        """
        if user and user.is_authenticated:
            from .models import Registration  # Avoid circular import
            return self.annotate(
                is_registered=models.Exists(
                    Registration.objects.filter(tournament=models.OuterRef("pk"), user=user)
                )
            )
        return self.annotate(
            is_registered=models.Value(False, output_field=models.BooleanField())
        )

    def by_status(self, status):
        """Tournaments in one status, soonest first."""
        return self.filter(status=status).order_by("start_time", "id")


class TournamentManager(models.Manager):
    def get_queryset(self):
        return TournamentQuerySet(self.model, using=self._db)

    def with_details(self, user=None):
        return self.get_queryset().with_details(user=user)

    def by_status(self, status):
        return self.get_queryset().by_status(status)
