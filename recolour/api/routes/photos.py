import logging

from fastapi import APIRouter, HTTPException, Response, status

from recolour.api.errors import unwrap
from recolour.api.schemas import PhotoOptionModel, PhotoUploadRequest
from recolour.dependencies.tickets import PartnerRole, PhotoServiceDep, PhotoTicket, TicketServiceDep
from recolour.photos.service import UnsupportedFileTypeError
from recolour.tickets.models import StoreError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/tickets", tags=["photos"])


@router.post(
    "/{ticket_id}/photos",
    response_model=PhotoOptionModel,
    status_code=status.HTTP_201_CREATED,
)
def upload_photo(
    payload: PhotoUploadRequest,
    ticket: PhotoTicket,
    role: PartnerRole,
    service: TicketServiceDep,
    photos: PhotoServiceDep,
) -> PhotoOptionModel:
    try:
        photo = photos.upload(ticket.id, payload.image_data, payload.thumbnail_data, payload.file_name)
    except UnsupportedFileTypeError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    # Files are on disk before the metadata is attached; undo them if attaching fails.
    result = service.add_partner_photo(ticket.id, photo, role.actor)
    if isinstance(result, StoreError):
        logger.warning("Attaching photo %s to ticket %s failed: %s", photo.id, ticket.id, result.code.value)
        photos.delete_files(ticket.id, photo.file_name)
    unwrap(result)
    return PhotoOptionModel.model_validate(photo)


@router.delete("/{ticket_id}/photos/{photo_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_photo(
    photo_id: str,
    ticket: PhotoTicket,
    role: PartnerRole,
    service: TicketServiceDep,
    photos: PhotoServiceDep,
) -> Response:
    photo = next((item for item in ticket.partner_photos if item.id == photo_id), None)
    if photo is None:
        raise HTTPException(status_code=404, detail="Photo not found on this ticket")

    photos.delete_files(ticket.id, photo.file_name)
    unwrap(service.remove_partner_photo(ticket.id, photo_id, role.actor))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
