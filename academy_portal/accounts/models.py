from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.db import models
from django.utils.translation import gettext_lazy as _


class CustomUserManager(BaseUserManager):
    """Кастомный менеджер для CustomUser, где email - это уникальный идентификатор"""

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError(_('Email обязателен'))
        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('is_active', True)
        extra_fields.setdefault('role', CustomUser.ROLE_ADMIN)

        if extra_fields.get('is_staff') is not True:
            raise ValueError(_('Superuser должен иметь is_staff=True'))
        if extra_fields.get('is_superuser') is not True:
            raise ValueError(_('Superuser должен иметь is_superuser=True'))

        return self.create_user(email, password, **extra_fields)


class CustomUser(AbstractUser):
    """
    Пользователь платформы.
    Вход по email (username отключен).

    Роли:
      - admin     — администратор платформы (back-office)
      - user      — владелец аккаунта спортсмена (родитель / сам спортсмен)
      - academic  — владелец академии (портал академии)
    """

    ROLE_ADMIN = 'admin'
    ROLE_USER = 'user'
    ROLE_ACADEMIC = 'academic'

    ROLE_CHOICES = (
        (ROLE_ADMIN, 'Администратор'),
        (ROLE_USER, 'Пользователь'),
        (ROLE_ACADEMIC, 'Академия'),
    )

    username = None
    # Спортсмены, заведённые академией, могут не иметь email
    email = models.EmailField(_('email адрес'), unique=True, null=True, blank=True)
    name = models.CharField(_('имя'), max_length=255, blank=True, default='')
    phone_number = models.CharField(
        _('номер телефона'),
        max_length=32,
        unique=True,
        blank=True,
        null=True,
    )
    role = models.CharField(
        _('роль'),
        max_length=20,
        choices=ROLE_CHOICES,
        default=ROLE_USER,
    )
    created_at = models.DateTimeField(_('создан'), auto_now_add=True)
    updated_at = models.DateTimeField(_('обновлён'), auto_now=True)

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []

    objects = CustomUserManager()

    class Meta:
        verbose_name = _('пользователь')
        verbose_name_plural = _('пользователи')
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.email} ({self.get_role_display()})"

    @property
    def is_platform_admin(self):
        return self.role == self.ROLE_ADMIN

    @property
    def is_academic(self):
        return self.role == self.ROLE_ACADEMIC

    def get_full_name(self):
        return self.name or super().get_full_name() or self.email


class Profile(models.Model):
    """Профиль спортсмена. У одного аккаунта может быть несколько (дети, родственники)."""

    RELATIONSHIP_SELF = 'self'

    user = models.ForeignKey(
        CustomUser,
        on_delete=models.CASCADE,
        related_name='profiles',
        verbose_name='Пользователь',
    )
    name = models.CharField('Имя', max_length=255)
    gender = models.CharField('Пол', max_length=50, blank=True, default='')
    birthday = models.DateField('Дата рождения', null=True, blank=True)
    image = models.CharField('Фото', max_length=500, blank=True, default='')
    relationship = models.CharField('Кем приходится', max_length=100, default=RELATIONSHIP_SELF)
    country = models.CharField('Страна', max_length=255, blank=True, default='')
    nationality = models.CharField('Гражданство', max_length=255, blank=True, default='')
    city = models.CharField('Город', max_length=255, blank=True, default='')
    street_address = models.CharField('Адрес', max_length=512, blank=True, default='')
    created_at = models.DateTimeField('Создано', auto_now_add=True)
    updated_at = models.DateTimeField('Обновлено', auto_now=True)

    class Meta:
        verbose_name = 'Профиль спортсмена'
        verbose_name_plural = 'Профили спортсменов'
        ordering = ['name']
        unique_together = [('user', 'name')]

    def __str__(self):
        return f'{self.name} ({self.user.email})'
