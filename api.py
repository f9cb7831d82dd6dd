"""
Bechdel Music API - REST API for the music Bechdel test service

This module exposes the lyric classifier over HTTP, together with the
song record store, the song catalog search and the lyrics lookup.
Built with FastAPI for automatic documentation and validation.
"""

from fastapi import FastAPI, HTTPException, Depends, Query, status
from fastapi.middleware.cors import CORSMiddleware
from typing import Optional
import logging
from datetime import datetime

from common.models.bechdel_status import BechdelStatus
from common.models.models import SongInput, SongRecord, BechdelResult, SearchCandidate, SongStats
from config.config import get_config
from services.bechdel_analyzer.bechdel_analyzer import InvalidSongInputError, get_bechdel_analyzer
from services.song_db.song_db import get_database
from services.song_service.song_service import SongService, get_song_service
from services.song_search_service.itunes_searcher import ITunesSearcher
from services.song_search_service.song_search_service import SongSearchService
from services.lyrics_finder_service.lyrics_finder_service import LyricsFinderService
from services.lyrics_finder_service.lyrics_apis.lyrics_ovh_searcher import LyricsOvhSearcher
from services.lyrics_finder_service.lyrics_apis.lrclib_searcher import LRCLibSearcher

# Import API models
from services.api_models.common_models import StandardResponse
from services.api_models.song_models import (
    SongCreate,
    SongResponse,
    SongSummary,
    BechdelResultResponse,
    AnalysisResponse,
    TopicsResponse,
    StatsResponse,
    DecadeStatsResponse
)
from services.api_models.utility_models import SearchResultResponse, LyricsResponse

LYRICS_NOT_FOUND_MESSAGE = "Lyrics not found automatically. Please paste lyrics manually."
LYRICS_UNAVAILABLE_MESSAGE = "Could not fetch lyrics. Please paste lyrics manually."

# Load configuration
config = get_config()

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Bechdel Music API",
    description="REST API for the music Bechdel test",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Services are created on first use so tests can override them
_services = {}


# ============================================================================
# DEPENDENCY FUNCTIONS
# ============================================================================

def get_repository():
    if 'repository' not in _services:
        _services['repository'] = get_database(config.database_path)
    return _services['repository']


def get_songs_service(repository=Depends(get_repository)) -> SongService:
    if 'song_service' not in _services:
        _services['song_service'] = get_song_service(get_bechdel_analyzer(), repository)
    return _services['song_service']


def get_search_service(repository=Depends(get_repository)) -> SongSearchService:
    if 'search_service' not in _services:
        searcher = ITunesSearcher(config.itunes_search_url, timeout=config.request_timeout)
        _services['search_service'] = SongSearchService(searcher, repository, config.search_result_limit)
    return _services['search_service']


def get_lyrics_finder() -> LyricsFinderService:
    if 'lyrics_finder' not in _services:
        _services['lyrics_finder'] = LyricsFinderService([
            LyricsOvhSearcher(config.lyrics_ovh_url, timeout=config.request_timeout),
            LRCLibSearcher()
        ])
    return _services['lyrics_finder']


# ============================================================================
# RESPONSE HELPERS
# ============================================================================

def _result_response(result: BechdelResult) -> BechdelResultResponse:
    topics = result.analysis.topics
    return BechdelResultResponse(
        passed=result.passed,
        status=result.status.value,
        confidence=result.confidence,
        analysis=AnalysisResponse(
            female_count=result.analysis.female_count,
            female_names=result.analysis.female_names,
            male_pronouns=result.analysis.male_pronouns,
            female_pronouns=result.analysis.female_pronouns,
            topics=TopicsResponse(
                romantic=topics.romantic,
                self_count=topics.ambition,
                ambition=topics.ambition,
                friendship=topics.friendship,
                other=topics.other,
                dominant_topic=topics.dominant_topic
            ),
            has_female_dialogue=result.analysis.has_female_dialogue,
            non_romantic_context=result.analysis.non_romantic_context
        ),
        reasoning=result.reasoning
    )


def _song_response(record: SongRecord) -> SongResponse:
    return SongResponse(
        id=record.id,
        title=record.title,
        artist=record.artist,
        year=record.year,
        lyrics=record.lyrics,
        collaborators=record.collaborators,
        bechdel_result=_result_response(record.bechdel_result) if record.bechdel_result else None,
        created_at=record.created_at.isoformat() if record.created_at else None
    )


def _search_response(candidate: SearchCandidate) -> SearchResultResponse:
    return SearchResultResponse(
        id=candidate.id,
        title=candidate.title,
        artist=candidate.artist,
        year=candidate.year,
        album=candidate.album,
        artwork=candidate.artwork,
        preview_url=candidate.preview_url,
        source=candidate.source,
        lyrics=candidate.lyrics,
        duration_ms=candidate.duration_ms
    )


def _stats_response(stats: SongStats) -> StatsResponse:
    return StatsResponse(
        total=stats.total,
        passed=stats.passed,
        failed=stats.failed,
        partial=stats.partial,
        by_decade={
            decade: DecadeStatsResponse(
                total=decade_stats.total,
                passed=decade_stats.passed,
                failed=decade_stats.failed,
                partial=decade_stats.partial
            )
            for decade, decade_stats in sorted(stats.by_decade.items())
        }
    )


def _to_song_input(song_data: SongCreate) -> SongInput:
    if not song_data.title.strip() or not song_data.artist.strip() or not song_data.lyrics.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing required fields: title, artist, lyrics"
        )

    return SongInput(
        title=song_data.title,
        artist=song_data.artist,
        lyrics=song_data.lyrics,
        year=song_data.year,
        collaborators=song_data.collaborators
    )


# ============================================================================
# ANALYSIS ENDPOINTS
# ============================================================================

@app.post("/api/analyze", response_model=StandardResponse, tags=["Analysis"])
async def analyze_song(song_data: SongCreate, song_service: SongService = Depends(get_songs_service)):
    """Run the Bechdel test on a song without saving it"""
    song_input = _to_song_input(song_data)

    try:
        result = song_service.analyze(song_input)

        response_data = _result_response(result).model_dump(by_alias=True)
        response_data['song'] = SongSummary(
            title=song_input.title,
            artist=song_input.artist,
            year=song_input.year
        ).model_dump()

        return StandardResponse(
            success=True,
            message="Song analyzed successfully",
            data=response_data
        )

    except InvalidSongInputError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Error analyzing song: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to analyze song"
        )


# ============================================================================
# SONG ENDPOINTS
# ============================================================================

@app.get("/api/songs", response_model=StandardResponse, tags=["Songs"])
async def list_songs(
    q: Optional[str] = None,
    filter_: str = Query("all", alias="filter"),
    song_service: SongService = Depends(get_songs_service)
):
    """List saved songs, optionally filtered by text and Bechdel status"""
    if filter_ == "all":
        status_filter = None
    else:
        try:
            status_filter = BechdelStatus(filter_)
        except ValueError:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Filter must be one of: all, pass, fail, partial"
            )

    try:
        songs = song_service.get_songs(query=q, status=status_filter)

        return StandardResponse(
            success=True,
            message="Songs retrieved successfully",
            data=[_song_response(song).model_dump(by_alias=True) for song in songs]
        )

    except Exception as e:
        logger.error(f"Error listing songs: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to list songs: {str(e)}"
        )


@app.post("/api/songs", response_model=StandardResponse, status_code=status.HTTP_201_CREATED, tags=["Songs"])
async def create_song(song_data: SongCreate, song_service: SongService = Depends(get_songs_service)):
    """Analyze a song and save it"""
    song_input = _to_song_input(song_data)

    try:
        record = song_service.add_song(song_input)

        return StandardResponse(
            success=True,
            message="Song saved successfully",
            data=_song_response(record).model_dump(by_alias=True)
        )

    except InvalidSongInputError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Error saving song: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save song"
        )


@app.get("/api/songs/stats", response_model=StandardResponse, tags=["Statistics"])
async def get_song_stats(song_service: SongService = Depends(get_songs_service)):
    """Pass/partial/fail totals, overall and per decade"""
    try:
        stats = song_service.get_stats()

        return StandardResponse(
            success=True,
            message="Statistics retrieved successfully",
            data=_stats_response(stats).model_dump()
        )

    except Exception as e:
        logger.error(f"Error getting stats: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to get stats: {str(e)}"
        )


# ============================================================================
# SEARCH AND LYRICS ENDPOINTS
# ============================================================================

@app.get("/api/search", response_model=StandardResponse, tags=["Search"])
async def search_songs(q: str = "", search_service: SongSearchService = Depends(get_search_service)):
    """Search the song catalog, merged with saved songs"""
    try:
        results = search_service.search(q)

        return StandardResponse(
            success=True,
            message="Search completed",
            data=[_search_response(candidate).model_dump() for candidate in results]
        )

    except Exception as e:
        logger.error(f"Error searching songs: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to search songs: {str(e)}"
        )


@app.get("/api/lyrics", response_model=StandardResponse, tags=["Lyrics"])
async def fetch_lyrics(
    artist: Optional[str] = None,
    title: Optional[str] = None,
    album: Optional[str] = None,
    duration_ms: Optional[int] = Query(None, gt=0),
    lyrics_finder: LyricsFinderService = Depends(get_lyrics_finder)
):
    """
    Fetch lyrics for a song, or ask for manual entry when none are found.

    album and duration_ms (both from a search result) allow an exact LRCLib lookup.
    """
    if not artist or not title:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing artist or title"
        )

    result = lyrics_finder.find_lyrics(artist, title, album=album, duration_ms=duration_ms)

    if result.found:
        lyrics_response = LyricsResponse(lyrics=result.lyrics, source=result.source)
        message = "Lyrics found"
    else:
        message = LYRICS_UNAVAILABLE_MESSAGE if result.error else LYRICS_NOT_FOUND_MESSAGE
        lyrics_response = LyricsResponse(lyrics=None, source=None, message=message)

    return StandardResponse(
        success=True,
        message=message,
        data=lyrics_response.model_dump()
    )


# ============================================================================
# HEALTH CHECK AND INFO ENDPOINTS
# ============================================================================

@app.get("/api/health", response_model=StandardResponse, tags=["System"])
async def health_check(repository=Depends(get_repository)):
    """Health check endpoint"""
    try:
        song_count = repository.count()

        health_data = {
            'status': 'healthy',
            'database': 'connected',
            'song_count': song_count,
            'timestamp': datetime.now().isoformat()
        }

        return StandardResponse(
            success=True,
            message="System is healthy",
            data=health_data
        )

    except Exception as e:
        logger.error(f"Health check failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Health check failed: {str(e)}"
        )


@app.get("/api/info", response_model=StandardResponse, tags=["System"])
async def get_api_info():
    """Get API information"""
    info_data = {
        'name': 'Bechdel Music API',
        'version': '1.0.0',
        'description': 'REST API for the music Bechdel test built with FastAPI',
        'docs_url': '/docs',
        'redoc_url': '/redoc',
        'endpoints': {
            'analysis': ['POST /api/analyze'],
            'songs': ['GET /api/songs', 'POST /api/songs', 'GET /api/songs/stats'],
            'search': ['GET /api/search'],
            'lyrics': ['GET /api/lyrics'],
            'system': ['GET /api/health', 'GET /api/info']
        }
    }

    return StandardResponse(
        success=True,
        message="API information retrieved successfully",
        data=info_data
    )
