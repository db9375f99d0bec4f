import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


def _timestamps():
    return [
        ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Создано')),
        ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Обновлено')),
    ]


SCOPE_CHOICES = [('all', 'Все'), ('specific', 'Выбранные')]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ('accounts', '0001_initial'),
        ('academies', '0001_initial'),
        ('catalog', '0001_initial'),
        ('programs', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='AcademicAthlete',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                *_timestamps(),
                ('certificate', models.CharField(blank=True, default='', max_length=500, verbose_name='Сертификат')),
                ('type', models.CharField(choices=[('primary', 'Основной'), ('fellow', 'Сопровождаемый')], default='primary', max_length=20, verbose_name='Тип')),
                ('first_guardian_name', models.CharField(blank=True, default='', max_length=255, verbose_name='Первый опекун')),
                ('first_guardian_relationship', models.CharField(blank=True, default='', max_length=255, verbose_name='Кем приходится (1)')),
                ('first_guardian_email', models.EmailField(blank=True, default='', max_length=254, verbose_name='Email опекуна (1)')),
                ('first_guardian_phone', models.CharField(blank=True, default='', max_length=32, verbose_name='Телефон опекуна (1)')),
                ('second_guardian_name', models.CharField(blank=True, default='', max_length=255, verbose_name='Второй опекун')),
                ('second_guardian_relationship', models.CharField(blank=True, default='', max_length=255, verbose_name='Кем приходится (2)')),
                ('second_guardian_email', models.EmailField(blank=True, default='', max_length=254, verbose_name='Email опекуна (2)')),
                ('second_guardian_phone', models.CharField(blank=True, default='', max_length=32, verbose_name='Телефон опекуна (2)')),
                ('academy', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='athletes', to='academies.academy', verbose_name='Академия')),
                ('profile', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='academy_athletes', to='accounts.profile', verbose_name='Профиль')),
                ('sport', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='athletes', to='catalog.sport', verbose_name='Вид спорта')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='academy_athletes', to=settings.AUTH_USER_MODEL, verbose_name='Пользователь')),
            ],
            options={
                'verbose_name': 'Спортсмен академии',
                'verbose_name_plural': 'Спортсмены академии',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='Booking',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                *_timestamps(),
                ('status', models.CharField(choices=[('success', 'Успешно'), ('rejected', 'Отклонено'), ('pending', 'Ожидает')], db_index=True, default='pending', max_length=20, verbose_name='Статус')),
                ('price', models.DecimalField(decimal_places=2, max_digits=10, verbose_name='Итоговая цена')),
                ('package_price', models.DecimalField(decimal_places=2, max_digits=10, verbose_name='Цена пакета')),
                ('academy_policy', models.BooleanField(default=False, verbose_name='Согласие с правилами академии')),
                ('roap_policy', models.BooleanField(default=False, verbose_name='Согласие с правилами платформы')),
                ('entry_fees_paid', models.BooleanField(default=False, verbose_name='Взнос оплачен')),
                ('assessment_deduction', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='deducted_in', to='bookings.booking', verbose_name='Учтённая оценка')),
                ('coach', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='bookings', to='programs.coach', verbose_name='Тренер')),
                ('package', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='bookings', to='programs.package', verbose_name='Пакет')),
                ('profile', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='bookings', to='accounts.profile', verbose_name='Профиль')),
            ],
            options={
                'verbose_name': 'Бронирование',
                'verbose_name_plural': 'Бронирования',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='BookingSession',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                *_timestamps(),
                ('date', models.DateField(db_index=True, verbose_name='Дата')),
                ('from_time', models.TimeField(verbose_name='С')),
                ('to_time', models.TimeField(verbose_name='До')),
                ('status', models.CharField(choices=[('pending', 'Ожидает'), ('accepted', 'Подтверждено'), ('upcoming', 'Предстоит'), ('rejected', 'Отклонено'), ('cancelled', 'Отменено')], default='pending', max_length=20, verbose_name='Статус')),
                ('booking', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='sessions', to='bookings.booking', verbose_name='Бронирование')),
            ],
            options={
                'verbose_name': 'Занятие',
                'verbose_name_plural': 'Занятия',
                'ordering': ['date', 'from_time'],
            },
        ),
        migrations.CreateModel(
            name='EntryFeesHistory',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('paid_at', models.DateTimeField(auto_now_add=True, verbose_name='Оплачено')),
                ('profile', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='entry_fees_history', to='accounts.profile', verbose_name='Профиль')),
                ('program', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='entry_fees_history', to='programs.program', verbose_name='Программа')),
                ('sport', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='entry_fees_history', to='catalog.sport', verbose_name='Вид спорта')),
            ],
            options={
                'verbose_name': 'Оплата взноса',
                'verbose_name_plural': 'История взносов',
                'ordering': ['-paid_at'],
            },
        ),
        migrations.CreateModel(
            name='Block',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                *_timestamps(),
                ('date', models.DateField(db_index=True, verbose_name='Дата')),
                ('start_time', models.TimeField(verbose_name='Начало')),
                ('end_time', models.TimeField(verbose_name='Окончание')),
                ('note', models.TextField(blank=True, default='', verbose_name='Заметка')),
                ('branch_scope', models.CharField(choices=SCOPE_CHOICES, default='all', max_length=10, verbose_name='Филиалы')),
                ('sport_scope', models.CharField(choices=SCOPE_CHOICES, default='all', max_length=10, verbose_name='Виды спорта')),
                ('package_scope', models.CharField(choices=SCOPE_CHOICES, default='all', max_length=10, verbose_name='Пакеты')),
                ('program_scope', models.CharField(choices=SCOPE_CHOICES, default='all', max_length=10, verbose_name='Программы')),
                ('academy', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='blocks', to='academies.academy', verbose_name='Академия')),
                ('branches', models.ManyToManyField(blank=True, related_name='blocks', to='programs.branch', verbose_name='Выбранные филиалы')),
                ('packages', models.ManyToManyField(blank=True, related_name='blocks', to='programs.package', verbose_name='Выбранные пакеты')),
                ('programs', models.ManyToManyField(blank=True, related_name='blocks', to='programs.program', verbose_name='Выбранные программы')),
                ('sports', models.ManyToManyField(blank=True, related_name='blocks', to='catalog.sport', verbose_name='Выбранные виды спорта')),
            ],
            options={
                'verbose_name': 'Блокировка',
                'verbose_name_plural': 'Блокировки',
                'ordering': ['date', 'start_time'],
            },
        ),
    ]
