from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


class Migration(migrations.Migration):

    dependencies = [
        ('review', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='ReviewLog',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('outcome', models.CharField(max_length=8)),
                ('idempotency_key', models.CharField(max_length=64)),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('status', models.CharField(max_length=16)),
                ('interval_days', models.PositiveIntegerField()),
                ('ease_factor', models.FloatField()),
                ('due_at', models.DateTimeField()),
                ('last_reviewed_at', models.DateTimeField()),
                ('consecutive_correct', models.PositiveIntegerField()),
                ('word', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='reviews', to='review.word')),
            ],
            options={
                'unique_together': {('word', 'idempotency_key')},
                'indexes': [models.Index(fields=['word', 'created_at'], name='review_log_word_created_idx')],
            },
        ),
    ]
