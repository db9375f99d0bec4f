import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ('catalog', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Academy',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Создано')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Обновлено')),
                ('slug', models.SlugField(max_length=255, unique=True, verbose_name='Slug')),
                ('entry_fees', models.DecimalField(decimal_places=2, default=0, max_digits=10, verbose_name='Вступительный взнос')),
                ('image', models.CharField(blank=True, default='', max_length=500, verbose_name='Логотип')),
                ('policy', models.TextField(blank=True, default='', verbose_name='Правила академии')),
                ('extra', models.CharField(blank=True, default='', max_length=255, verbose_name='Дополнительно')),
                ('status', models.CharField(choices=[('pending', 'На модерации'), ('accepted', 'Одобрена'), ('rejected', 'Отклонена')], db_index=True, default='pending', max_length=20, verbose_name='Статус')),
                ('onboarded', models.BooleanField(default=False, verbose_name='Онбординг пройден')),
                ('hidden', models.BooleanField(default=False, verbose_name='Скрыта')),
                ('sports', models.ManyToManyField(blank=True, related_name='academies', to='catalog.sport', verbose_name='Виды спорта')),
                ('user', models.OneToOneField(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='academy', to=settings.AUTH_USER_MODEL, verbose_name='Владелец')),
            ],
            options={
                'verbose_name': 'Академия',
                'verbose_name_plural': 'Академии',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='AcademyTranslation',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Создано')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Обновлено')),
                ('locale', models.CharField(default='en', max_length=10, verbose_name='Локаль')),
                ('name', models.CharField(blank=True, default='', max_length=255, verbose_name='Название')),
                ('description', models.TextField(blank=True, default='', verbose_name='Описание')),
                ('academy', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='translations', to='academies.academy')),
            ],
            options={
                'verbose_name': 'Перевод академии',
                'verbose_name_plural': 'Переводы академий',
                'ordering': ['locale'],
                'unique_together': {('academy', 'locale')},
            },
        ),
        migrations.CreateModel(
            name='AcademyGalleryImage',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('url', models.CharField(max_length=500, verbose_name='Изображение')),
                ('order', models.PositiveIntegerField(default=0, verbose_name='Порядок')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Создано')),
                ('academy', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='gallery', to='academies.academy', verbose_name='Академия')),
            ],
            options={
                'verbose_name': 'Фото галереи',
                'verbose_name_plural': 'Галерея',
                'ordering': ['order', 'id'],
            },
        ),
    ]
