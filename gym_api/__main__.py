"""Run the API with uvicorn: ``python -m gym_api``."""
import os

import uvicorn


def main() -> None:
    uvicorn.run(
        "gym_api.app:create_app",
        factory=True,
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
    )


if __name__ == "__main__":
    main()
