"""
Entry point for running the FastAPI application.
"""

import uvicorn
from hrtime.core.config import settings
from hrtime.core.logging import logger

# Log the available endpoints for easy reference
logger.info("""
Available endpoints:
-------------------------------------------------
POST   /api/auth/login                        - Sign in through the HR backend
POST   /api/auth/logout                       - Close the session
GET    /api/timesheets/weeks                  - Week buckets with filters
POST   /api/timesheets/weekly                 - Submit a week of hours
GET    /api/manager/pending/weeks             - Pending weeks of the team
PUT    /api/manager/timesheets/{id}/status    - Approve or reject a day
-------------------------------------------------
""")

if __name__ == "__main__":
    """Run the application with uvicorn server."""
    print(f"Starting server at http://{settings.HOST}:{settings.PORT}")
    print(f"Documentation available at http://{settings.HOST}:{settings.PORT}/docs")

    uvicorn.run(
        "hrtime.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
