"""
Бизнес-логика академий: регистрация, модерация, редактирование профиля.
"""
import logging

from django.db import transaction

from core.exceptions import FieldValidationError
from core.translations import save_translation
from core.utils import unique_slug
from notifications.services import NotificationService

from .models import Academy, AcademyGalleryImage

logger = logging.getLogger(__name__)


class AcademyService:

    @staticmethod
    @transaction.atomic
    def register(name, email, password, academy_name, phone_number=None):
        """
        Регистрация академии: пользователь с ролью academic
        и академия в статусе pending.
        """
        from accounts.models import CustomUser

        email = (email or '').strip().lower()
        if CustomUser.objects.filter(email__iexact=email).exists():
            raise FieldValidationError('User with this email already exists', field='email')
        if phone_number and CustomUser.objects.filter(phone_number=phone_number).exists():
            raise FieldValidationError('User with this phone number already exists', field='phone_number')

        user = CustomUser.objects.create_user(
            email=email,
            password=password,
            name=name,
            phone_number=phone_number or None,
            role=CustomUser.ROLE_ACADEMIC,
        )
        academy = Academy.objects.create(
            user=user,
            slug=unique_slug(Academy, academy_name),
            status=Academy.STATUS_PENDING,
        )
        save_translation(academy, name=academy_name)
        logger.info('Academy registered: academy=%s user=%s', academy.pk, user.pk)
        return academy

    @staticmethod
    def set_status(academy, status):
        """accept / reject. Владелец получает уведомление."""
        if status not in (Academy.STATUS_ACCEPTED, Academy.STATUS_REJECTED):
            raise FieldValidationError('Invalid status', field='status')

        academy.status = status
        academy.save(update_fields=['status', 'updated_at'])

        if status == Academy.STATUS_ACCEPTED:
            title = 'Academy accepted'
            description = 'Your academy has been accepted. You can now sign in and complete onboarding.'
        else:
            title = 'Academy rejected'
            description = 'Your academy registration has been rejected.'
        NotificationService.notify(title, description, academy=academy, user=academy.user)
        logger.info('Academy %s status changed to %s', academy.pk, status)
        return academy

    @staticmethod
    def toggle_hidden(academy):
        academy.hidden = not academy.hidden
        academy.save(update_fields=['hidden', 'updated_at'])
        return academy

    @staticmethod
    @transaction.atomic
    def update_details(academy, data, locale=None):
        """
        Частичное обновление профиля академии.

        data: name, description, sports (ids), image, gallery (список путей),
        policy, entry_fees, extra — передаются только изменяемые ключи.
        """
        translation_values = {
            key: data[key] for key in ('name', 'description') if key in data
        }
        if translation_values:
            save_translation(academy, locale, **translation_values)

        update_fields = []
        for key in ('image', 'policy', 'entry_fees', 'extra'):
            if key in data:
                setattr(academy, key, data[key])
                update_fields.append(key)
        if update_fields:
            academy.save(update_fields=update_fields + ['updated_at'])

        if 'sports' in data:
            academy.sports.set(data['sports'])

        if 'gallery' in data:
            academy.gallery.all().delete()
            AcademyGalleryImage.objects.bulk_create([
                AcademyGalleryImage(academy=academy, url=url, order=index)
                for index, url in enumerate(data['gallery'])
            ])

        logger.info('Academy %s details updated: %s', academy.pk, sorted(data.keys()))
        return academy

    @staticmethod
    def check_status(user, academy):
        """Куда отправить пользователя портала."""
        if user is None or not user.is_authenticated or academy is None:
            return {'redirect': '/sign-in'}
        return {'is_onboarded': academy.onboarded, 'status': academy.status}
