import logging

from rest_framework import generics, status
from rest_framework.response import Response

from clinicqueue.core.utils import log_queue_action

from .exceptions import (
	NotFoundError,
	QueueError,
	StorageError,
	ValidationError,
)
from .permissions import QueueClearPermission, QueuePermission
from .serializers import (
	PatientReadSerializer,
	PatientWriteSerializer,
	QueueEntrySerializer,
	ReorderSerializer,
	queue_state,
)
from .store import QueueStore

logger = logging.getLogger(__name__)


def queue_error_response(e: QueueError) -> Response:
	if isinstance(e, ValidationError):
		return Response(e.to_dict(), status=status.HTTP_400_BAD_REQUEST)
	if isinstance(e, NotFoundError):
		return Response(e.to_dict(), status=status.HTTP_404_NOT_FOUND)
	if isinstance(e, StorageError):
		return Response(e.to_dict(), status=status.HTTP_503_SERVICE_UNAVAILABLE)
	return Response({'detail': str(e)}, status=status.HTTP_400_BAD_REQUEST)


class QueueAPIView(generics.GenericAPIView):
	"""Base view: every queue endpoint talks to one QueueStore."""

	permission_classes = [QueuePermission]
	serializer_class = PatientReadSerializer

	def get_store(self) -> QueueStore:
		return QueueStore(using='default')

	def state_response(self, store, patient=None, status_code=status.HTTP_200_OK) -> Response:
		"""Envelope after a committed mutation.

		If re-reading the lists fails the write still stands: keep the success
		status and return waiting/completed as null so clients reload instead
		of retrying the mutation.
		"""
		context = self.get_serializer_context()
		try:
			data = queue_state(store, patient, context=context)
		except StorageError as e:
			logger.warning('queue: change saved but reloading lists failed (%s)', e.operation)
			data = {
				'patient': PatientReadSerializer(patient, context=context).data if patient is not None else None,
				'waiting': None,
				'completed': None,
				'detail': 'Change saved, queue could not be reloaded',
			}
		return Response(data, status=status_code)



class QueueOverviewView(QueueAPIView):
	"""GET /api/queue/ - waiting and completed lists in one response."""

	def get(self, request, *args, **kwargs):
		try:
			data = queue_state(self.get_store(), context=self.get_serializer_context())
		except QueueError as e:
			return queue_error_response(e)
		log_queue_action(request.user, 'queue_view')
		return Response(data, status=status.HTTP_200_OK)


class WaitingListCreateView(QueueAPIView):
	"""GET: waiting patients in queue order. POST: add a patient at the tail."""

	def get_serializer_class(self):
		if self.request.method == 'POST':
			return PatientWriteSerializer
		return QueueEntrySerializer

	def get(self, request, *args, **kwargs):
		try:
			patients = self.get_store().list()
		except QueueError as e:
			return queue_error_response(e)
		log_queue_action(request.user, 'queue_view')
		return Response(self.get_serializer(patients, many=True).data, status=status.HTTP_200_OK)

	def post(self, request, *args, **kwargs):
		serializer = self.get_serializer(data=request.data)
		serializer.is_valid(raise_exception=True)

		store = self.get_store()
		try:
			store.add(
				name=serializer.validated_data['name'],
				examination=serializer.validated_data['examination'],
			)
		except QueueError as e:
			return queue_error_response(e)

		log_queue_action(request.user, 'queue_patient_added')
		return self.state_response(store, status_code=status.HTTP_201_CREATED)


class CompletedListView(QueueAPIView):
	"""GET /api/queue/patients/completed/ - most recently completed first."""

	def get(self, request, *args, **kwargs):
		try:
			patients = self.get_store().list_completed()
		except QueueError as e:
			return queue_error_response(e)
		log_queue_action(request.user, 'queue_view')
		return Response(self.get_serializer(patients, many=True).data, status=status.HTTP_200_OK)


class PatientDetailView(QueueAPIView):
	"""PUT: change name/examination. DELETE: remove from the queue."""

	serializer_class = PatientWriteSerializer
	http_method_names = ['put', 'delete', 'options', 'head']

	def put(self, request, pk, *args, **kwargs):
		serializer = self.get_serializer(data=request.data)
		serializer.is_valid(raise_exception=True)

		store = self.get_store()
		try:
			store.update(
				pk,
				name=serializer.validated_data['name'],
				examination=serializer.validated_data['examination'],
			)
		except QueueError as e:
			return queue_error_response(e)

		log_queue_action(request.user, 'queue_patient_updated', patient_id=pk)
		return self.state_response(store)

	def delete(self, request, pk, *args, **kwargs):
		store = self.get_store()
		try:
			store.remove(pk)
		except QueueError as e:
			return queue_error_response(e)

		log_queue_action(request.user, 'queue_patient_removed', patient_id=pk)
		return self.state_response(store)


class PatientCompleteView(QueueAPIView):
	"""POST /api/queue/patients/<pk>/complete/"""

	def post(self, request, pk, *args, **kwargs):
		store = self.get_store()
		try:
			patient = store.mark_completed(pk)
		except QueueError as e:
			return queue_error_response(e)

		if patient is not None:
			log_queue_action(
				request.user,
				'queue_patient_completed',
				patient_id=pk,
				meta={'from_position': patient.queue_position},
			)
		return self.state_response(store, patient)


class PatientRestoreView(QueueAPIView):
	"""POST /api/queue/patients/<pk>/restore/"""

	def post(self, request, pk, *args, **kwargs):
		store = self.get_store()
		try:
			patient = store.restore_patient(pk)
		except QueueError as e:
			return queue_error_response(e)

		if patient is not None:
			log_queue_action(request.user, 'queue_patient_restored', patient_id=pk)
		return self.state_response(store, patient)


class PatientReorderView(QueueAPIView):
	"""POST /api/queue/patients/<pk>/reorder/  Body: {"new_position": 2}"""

	serializer_class = ReorderSerializer

	def post(self, request, pk, *args, **kwargs):
		serializer = self.get_serializer(data=request.data)
		serializer.is_valid(raise_exception=True)
		new_position = serializer.validated_data['new_position']

		store = self.get_store()
		try:
			store.reorder(pk, new_position)
		except QueueError as e:
			return queue_error_response(e)

		log_queue_action(
			request.user,
			'queue_patient_reordered',
			patient_id=pk,
			meta={'new_position': new_position},
		)
		return self.state_response(store)


class QueueClearView(QueueAPIView):
	"""POST /api/queue/clear/ - delete every patient, waiting or completed."""

	permission_classes = [QueueClearPermission]

	def post(self, request, *args, **kwargs):
		store = self.get_store()
		try:
			store.clear_all()
		except QueueError as e:
			return queue_error_response(e)

		log_queue_action(request.user, 'queue_cleared')
		return self.state_response(store)


class QueueClearCompletedView(QueueAPIView):
	"""POST /api/queue/clear-completed/ - delete completed patients only."""

	permission_classes = [QueueClearPermission]

	def post(self, request, *args, **kwargs):
		store = self.get_store()
		try:
			store.clear_completed()
		except QueueError as e:
			return queue_error_response(e)

		log_queue_action(request.user, 'queue_completed_cleared')
		return self.state_response(store)
