from fastapi import Request

from portfolio_api.services import RecordService


def get_record_service(request: Request) -> RecordService:
    """Record service bound to the store and media storage opened at startup."""
    return RecordService(
        store=request.app.state.store,
        blob_store=request.app.state.blob_store,
        folder_root=request.app.state.settings.upload_folder_root,
        singleton_lock=request.app.state.singleton_lock,
    )
