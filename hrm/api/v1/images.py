"""
Employee photo commands
"""
from hrm.api.commands import CommandRouter
from hrm.services import image_service

router = CommandRouter()


@router.command("save_employee_image")
def save_employee_image_command(ctx, epf_number: str, image_data: str) -> str:
    """Store a base64 photo; returns the relative path to keep in image_path"""
    return image_service.save_employee_image(
        ctx.settings.DATA_DIR, ctx.settings.IMAGES_DIRNAME, epf_number, image_data
    )


@router.command("get_employee_image")
def get_employee_image_command(ctx, image_path: str) -> str:
    return image_service.get_employee_image(
        ctx.settings.DATA_DIR, ctx.settings.IMAGES_DIRNAME, image_path
    )
