"""Waitlist App URLs - Clinic Waiting Queue.

Prefix: /api/
Routes:
    GET         /api/queue/                              - Waiting + completed lists
    GET/POST    /api/queue/patients/                     - Waiting list / add patient
    GET         /api/queue/patients/completed/           - Completed list
    PUT/DELETE  /api/queue/patients/<pk>/                - Update / remove patient
    POST        /api/queue/patients/<pk>/complete/       - Mark examination completed
    POST        /api/queue/patients/<pk>/restore/        - Put completed patient back in line
    POST        /api/queue/patients/<pk>/reorder/        - Move patient to another position
    POST        /api/queue/clear/                        - Delete all patients
    POST        /api/queue/clear-completed/              - Delete completed patients
"""

from django.urls import path

from clinicqueue.waitlist.views import (
    CompletedListView,
    PatientCompleteView,
    PatientDetailView,
    PatientReorderView,
    PatientRestoreView,
    QueueClearCompletedView,
    QueueClearView,
    QueueOverviewView,
    WaitingListCreateView,
)

app_name = 'waitlist'

urlpatterns = [
    path('queue/', QueueOverviewView.as_view(), name='overview'),
    path('queue/patients/', WaitingListCreateView.as_view(), name='list'),
    path('queue/patients/completed/', CompletedListView.as_view(), name='completed'),
    path('queue/patients/<int:pk>/', PatientDetailView.as_view(), name='detail'),
    path('queue/patients/<int:pk>/complete/', PatientCompleteView.as_view(), name='complete'),
    path('queue/patients/<int:pk>/restore/', PatientRestoreView.as_view(), name='restore'),
    path('queue/patients/<int:pk>/reorder/', PatientReorderView.as_view(), name='reorder'),
    path('queue/clear/', QueueClearView.as_view(), name='clear'),
    path('queue/clear-completed/', QueueClearCompletedView.as_view(), name='clear_completed'),
]
