from django.db import migrations, models
import django.utils.timezone


class Migration(migrations.Migration):

	initial = True

	dependencies = []

	operations = [
		migrations.CreateModel(
			name="Patient",
			fields=[
				("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
				("name", models.CharField(max_length=200)),
				("examination", models.CharField(max_length=200)),
				(
					"status",
					models.CharField(
						blank=True,
						choices=[
							("waiting", "waiting"),
							("completed", "completed"),
						],
						default="waiting",
						max_length=16,
						null=True,
					),
				),
				("queue_position", models.PositiveIntegerField()),
				("created_at", models.DateTimeField(default=django.utils.timezone.now, editable=False)),
				("completed_at", models.DateTimeField(blank=True, null=True)),
			],
			options={
				"verbose_name": "Patient (Warteschlange)",
				"verbose_name_plural": "Patients (Warteschlange)",
				"db_table": "waitlist_patient",
				"ordering": ["queue_position", "id"],
				"indexes": [
					models.Index(fields=["status", "queue_position"], name="waitlist_pa_status_9d1e4c_idx"),
				],
			},
		),
	]
