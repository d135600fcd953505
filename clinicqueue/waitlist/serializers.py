from rest_framework import serializers

from clinicqueue.waitlist.models import Patient


class PatientReadSerializer(serializers.ModelSerializer):
    """Read-only serializer with all fields.

    status is always rendered as 'waiting' or 'completed', legacy NULL rows
    included.
    """

    status = serializers.CharField(source='effective_status', read_only=True)

    class Meta:
        model = Patient
        fields = [
            'id',
            'name',
            'examination',
            'status',
            'queue_position',
            'created_at',
            'completed_at',
        ]
        read_only_fields = fields


class QueueEntrySerializer(PatientReadSerializer):
    """Waiting patient with its rank in the current queue view."""

    actual_position = serializers.IntegerField(read_only=True)
    patients_ahead = serializers.IntegerField(read_only=True)

    class Meta(PatientReadSerializer.Meta):
        fields = PatientReadSerializer.Meta.fields + ['actual_position', 'patients_ahead']
        read_only_fields = fields


class PatientWriteSerializer(serializers.Serializer):
    """Input for add/update. Both fields are required and trimmed."""

    name = serializers.CharField(max_length=200, allow_blank=False, trim_whitespace=True)
    examination = serializers.CharField(max_length=200, allow_blank=False, trim_whitespace=True)


class ReorderSerializer(serializers.Serializer):
    """Input for reorder. Out-of-range positions are clamped by the store."""

    new_position = serializers.IntegerField()


def queue_state(store, patient=None, context=None) -> dict:
    """Response envelope for queue mutations: the touched patient plus both lists."""
    return {
        'patient': PatientReadSerializer(patient, context=context).data if patient is not None else None,
        'waiting': QueueEntrySerializer(store.list(), many=True, context=context).data,
        'completed': PatientReadSerializer(store.list_completed(), many=True, context=context).data,
    }
