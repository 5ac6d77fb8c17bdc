"""Services for testdeck."""

from testdeck.services.bulk_upload_client import BulkUploadClient
from testdeck.services.import_service import ImportWorkflow

__all__ = ["BulkUploadClient", "ImportWorkflow"]
