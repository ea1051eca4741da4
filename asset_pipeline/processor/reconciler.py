from collections.abc import Sequence
from dataclasses import replace

from asset_pipeline.cart.models import CartItem
from asset_pipeline.processor.models import UploadResult, UploadSummary

UPLOAD_SUCCESS = "success"
UPLOAD_FAILED = "failed"


def reconcile(items: Sequence[CartItem], results: Sequence[UploadResult]) -> list[CartItem]:
    """Annotate each item with its upload outcome. Inputs are not modified.

    Results are matched to items by ``item_index``; an item without a result
    is marked failed with "Unknown error". Uploaded items also get their
    print/original/display fields pointed at the remote URL; their inline
    high-quality and admin-cropped images are dropped.
    """
    by_index = {result.item_index: result for result in results}
    reconciled = []
    for index, item in enumerate(items):
        result = by_index.get(index)
        if result is not None and result.urls is not None:
            urls = result.urls
            reconciled.append(
                replace(
                    item,
                    remote_urls=urls,
                    upload_status=UPLOAD_SUCCESS,
                    upload_error=None,
                    print_image=urls.print,
                    original_image=urls.original,
                    display_image=urls.display,
                    high_quality_print_image=None,
                    admin_cropped_image=None,
                )
            )
        else:
            error = (result.error if result is not None else None) or "Unknown error"
            reconciled.append(
                replace(item, remote_urls=None, upload_status=UPLOAD_FAILED, upload_error=error)
            )
    return reconciled


def summarize_uploads(items: Sequence[CartItem]) -> UploadSummary:
    uploaded = sum(1 for item in items if item.upload_status == UPLOAD_SUCCESS)
    return UploadSummary(uploaded=uploaded, total=len(items))
