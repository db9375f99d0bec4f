import django.db.models.deletion
from django.db import migrations, models


def _timestamps():
    return [
        ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Создано')),
        ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Обновлено')),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('academies', '0001_initial'),
        ('catalog', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Branch',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                *_timestamps(),
                ('slug', models.SlugField(max_length=255, verbose_name='Slug')),
                ('latitude', models.CharField(blank=True, default='', max_length=255, verbose_name='Широта')),
                ('longitude', models.CharField(blank=True, default='', max_length=255, verbose_name='Долгота')),
                ('is_default', models.BooleanField(default=False, verbose_name='Основной филиал')),
                ('rate', models.FloatField(blank=True, null=True, verbose_name='Рейтинг Google')),
                ('reviews', models.PositiveIntegerField(blank=True, null=True, verbose_name='Количество отзывов')),
                ('url', models.CharField(blank=True, default='', max_length=255, verbose_name='Ссылка на карту')),
                ('place_id', models.CharField(blank=True, default='', max_length=255, verbose_name='Google place_id')),
                ('name_in_google_map', models.CharField(blank=True, default='', max_length=255, verbose_name='Название в Google Maps')),
                ('hidden', models.BooleanField(default=False, verbose_name='Скрыт')),
                ('academy', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='branches', to='academies.academy', verbose_name='Академия')),
                ('facilities', models.ManyToManyField(blank=True, related_name='branches', to='catalog.facility', verbose_name='Удобства')),
                ('sports', models.ManyToManyField(blank=True, related_name='branches', to='catalog.sport', verbose_name='Виды спорта')),
            ],
            options={
                'verbose_name': 'Филиал',
                'verbose_name_plural': 'Филиалы',
                'ordering': ['-is_default', 'created_at'],
            },
        ),
        migrations.CreateModel(
            name='BranchTranslation',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                *_timestamps(),
                ('locale', models.CharField(default='en', max_length=10, verbose_name='Локаль')),
                ('name', models.CharField(max_length=255, verbose_name='Название')),
                ('branch', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='translations', to='programs.branch')),
            ],
            options={
                'verbose_name': 'Перевод филиала',
                'verbose_name_plural': 'Переводы филиалов',
                'ordering': ['locale'],
                'abstract': False,
                'unique_together': {('branch', 'locale')},
            },
        ),
        migrations.CreateModel(
            name='Review',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                *_timestamps(),
                ('place_id', models.CharField(max_length=255, verbose_name='Google place_id')),
                ('author_name', models.CharField(max_length=255, verbose_name='Автор')),
                ('author_url', models.CharField(blank=True, default='', max_length=512, verbose_name='Профиль автора')),
                ('language', models.CharField(default='en', max_length=10, verbose_name='Язык')),
                ('original_language', models.CharField(default='en', max_length=10, verbose_name='Исходный язык')),
                ('profile_photo_url', models.CharField(blank=True, default='', max_length=512, verbose_name='Фото автора')),
                ('rating', models.PositiveSmallIntegerField(verbose_name='Оценка')),
                ('relative_time_description', models.CharField(blank=True, default='', max_length=100, verbose_name='Когда')),
                ('text', models.TextField(blank=True, default='', verbose_name='Текст')),
                ('time', models.BigIntegerField(verbose_name='Unix time')),
                ('translated', models.BooleanField(default=False, verbose_name='Переведён')),
                ('branch', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='place_reviews', to='programs.branch', verbose_name='Филиал')),
            ],
            options={
                'verbose_name': 'Отзыв',
                'verbose_name_plural': 'Отзывы',
                'ordering': ['-time'],
            },
        ),
        migrations.CreateModel(
            name='Program',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                *_timestamps(),
                ('name', models.CharField(max_length=255, verbose_name='Название')),
                ('description', models.TextField(blank=True, default='', verbose_name='Описание')),
                ('type', models.CharField(choices=[('TEAM', 'Групповая'), ('PRIVATE', 'Индивидуальная')], default='TEAM', max_length=20, verbose_name='Тип')),
                ('number_of_seats', models.PositiveIntegerField(blank=True, null=True, verbose_name='Мест')),
                ('gender', models.CharField(blank=True, default='', max_length=255, verbose_name='Пол')),
                ('start_date_of_birth', models.DateField(blank=True, null=True, verbose_name='Дата рождения с')),
                ('end_date_of_birth', models.DateField(blank=True, null=True, verbose_name='Дата рождения по')),
                ('color', models.CharField(blank=True, default='', max_length=32, verbose_name='Цвет в календаре')),
                ('assessment_deducted_from_program', models.BooleanField(default=False, verbose_name='Стоимость оценки вычитается из программы')),
                ('academy', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='programs', to='academies.academy', verbose_name='Академия')),
                ('branch', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='programs', to='programs.branch', verbose_name='Филиал')),
                ('sport', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='programs', to='catalog.sport', verbose_name='Вид спорта')),
            ],
            options={
                'verbose_name': 'Программа',
                'verbose_name_plural': 'Программы',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='Package',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                *_timestamps(),
                ('name', models.CharField(default='Assessment Package', max_length=255, verbose_name='Название')),
                ('price', models.DecimalField(decimal_places=2, max_digits=10, verbose_name='Цена')),
                ('start_date', models.DateField(verbose_name='Начало')),
                ('end_date', models.DateField(verbose_name='Окончание')),
                ('months', models.JSONField(blank=True, default=list, verbose_name='Месяцы')),
                ('session_per_week', models.PositiveIntegerField(default=0, verbose_name='Занятий в неделю')),
                ('session_duration', models.PositiveIntegerField(blank=True, null=True, verbose_name='Длительность занятия, мин')),
                ('capacity', models.PositiveIntegerField(default=0, verbose_name='Вместимость')),
                ('memo', models.TextField(blank=True, default='', verbose_name='Заметка')),
                ('entry_fees', models.DecimalField(decimal_places=2, default=0, max_digits=10, verbose_name='Вступительный взнос')),
                ('entry_fees_explanation', models.TextField(blank=True, default='', verbose_name='Пояснение к взносу')),
                ('entry_fees_applied_until', models.JSONField(blank=True, default=list, verbose_name='Взнос для месяцев')),
                ('entry_fees_start_date', models.DateField(blank=True, null=True, verbose_name='Взнос с')),
                ('entry_fees_end_date', models.DateField(blank=True, null=True, verbose_name='Взнос по')),
                ('program', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='packages', to='programs.program', verbose_name='Программа')),
            ],
            options={
                'verbose_name': 'Пакет',
                'verbose_name_plural': 'Пакеты',
                'ordering': ['start_date', 'id'],
            },
        ),
        migrations.CreateModel(
            name='Schedule',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                *_timestamps(),
                ('day', models.CharField(choices=[('monday', 'Monday'), ('tuesday', 'Tuesday'), ('wednesday', 'Wednesday'), ('thursday', 'Thursday'), ('friday', 'Friday'), ('saturday', 'Saturday'), ('sunday', 'Sunday')], max_length=20, verbose_name='День недели')),
                ('from_time', models.TimeField(verbose_name='С')),
                ('to_time', models.TimeField(verbose_name='До')),
                ('memo', models.TextField(blank=True, default='', verbose_name='Заметка')),
                ('package', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='schedules', to='programs.package', verbose_name='Пакет')),
            ],
            options={
                'verbose_name': 'Расписание',
                'verbose_name_plural': 'Расписание',
                'ordering': ['id'],
            },
        ),
        migrations.CreateModel(
            name='Coach',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                *_timestamps(),
                ('name', models.CharField(max_length=255, verbose_name='Имя')),
                ('title', models.CharField(blank=True, default='', max_length=255, verbose_name='Должность')),
                ('image', models.CharField(blank=True, default='', max_length=500, verbose_name='Фото')),
                ('bio', models.TextField(blank=True, default='', verbose_name='О тренере')),
                ('gender', models.CharField(blank=True, default='', max_length=50, verbose_name='Пол')),
                ('private_session_percentage', models.CharField(blank=True, default='', max_length=255, verbose_name='Процент за индивидуальные')),
                ('date_of_birth', models.DateField(blank=True, null=True, verbose_name='Дата рождения')),
                ('academy', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='coaches', to='academies.academy', verbose_name='Академия')),
                ('packages', models.ManyToManyField(blank=True, related_name='coaches', to='programs.package', verbose_name='Пакеты')),
                ('programs', models.ManyToManyField(blank=True, related_name='coaches', to='programs.program', verbose_name='Программы')),
                ('spoken_languages', models.ManyToManyField(blank=True, related_name='coaches', to='catalog.spokenlanguage', verbose_name='Языки')),
                ('sports', models.ManyToManyField(blank=True, related_name='coaches', to='catalog.sport', verbose_name='Виды спорта')),
            ],
            options={
                'verbose_name': 'Тренер',
                'verbose_name_plural': 'Тренеры',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='Discount',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                *_timestamps(),
                ('type', models.CharField(choices=[('fixed', 'Фиксированная'), ('percentage', 'Процент')], max_length=20, verbose_name='Тип')),
                ('value', models.DecimalField(decimal_places=2, max_digits=10, verbose_name='Размер')),
                ('start_date', models.DateTimeField(verbose_name='Начало')),
                ('end_date', models.DateTimeField(verbose_name='Окончание')),
                ('packages', models.ManyToManyField(blank=True, related_name='discounts', to='programs.package', verbose_name='Пакеты')),
                ('program', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='discounts', to='programs.program', verbose_name='Программа')),
            ],
            options={
                'verbose_name': 'Скидка',
                'verbose_name_plural': 'Скидки',
                'ordering': ['start_date'],
            },
        ),
    ]
