from fastapi import APIRouter

router = APIRouter()


@router.get("/check")
def health():
    return {"status": "ok"}
