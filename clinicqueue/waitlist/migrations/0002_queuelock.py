from django.db import migrations, models


def create_lock_row(apps, schema_editor):
	QueueLock = apps.get_model("waitlist", "QueueLock")
	QueueLock.objects.using(schema_editor.connection.alias).get_or_create(pk=1)


class Migration(migrations.Migration):

	dependencies = [
		("waitlist", "0001_initial"),
	]

	operations = [
		migrations.CreateModel(
			name="QueueLock",
			fields=[
				("id", models.PositiveSmallIntegerField(default=1, editable=False, primary_key=True, serialize=False)),
			],
			options={
				"db_table": "waitlist_queuelock",
			},
		),
		migrations.RunPython(create_lock_row, migrations.RunPython.noop),
	]
