"""Celery tasks: рейтинг и отзывы филиалов из Google Places."""
import logging

from celery import shared_task
from django.utils import timezone

from .models import Branch
from .services import ReviewService

logger = logging.getLogger(__name__)


@shared_task(name='programs.tasks.refresh_branch_reviews')
def refresh_branch_reviews(branch_id):
    branch = Branch.objects.filter(pk=branch_id).prefetch_related('translations').first()
    if branch is None:
        logger.info('refresh_branch_reviews: branch %s no longer exists', branch_id)
        return False
    return ReviewService.refresh_branch(branch)


@shared_task(name='programs.tasks.refresh_all_branch_reviews')
def refresh_all_branch_reviews():
    """Периодическая задача (beat): ставит обновление для каждого филиала."""
    branch_ids = list(
        Branch.objects.exclude(name_in_google_map='').values_list('pk', flat=True)
    )
    for branch_id in branch_ids:
        refresh_branch_reviews.delay(branch_id)
    return {
        'queued': len(branch_ids),
        'timestamp': timezone.now().isoformat(),
    }
