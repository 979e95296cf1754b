"""
auto-deploy-manifests - Kubernetes manifest generator for auto-deploy releases

Expands a release's values into the web Deployment, one Deployment per
worker and an optional NetworkPolicy, using kubernetes-client models.
"""

from .create_manifests import create_manifests
from .models import Values, WorkerSpec, ChartInfo

__all__ = ['create_manifests', 'Values', 'WorkerSpec', 'ChartInfo']
