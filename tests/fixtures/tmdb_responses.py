"""
Mock TMDB API responses for testing.

Realistic (trimmed) payloads for the search, movie, tv and season
endpoints, used with respx and with mocked TMDBClient instances.
"""

# GET /search/movie?query=The Matrix
TMDB_SEARCH_MOVIE_RESPONSE = {
    "page": 1,
    "results": [
        {
            "id": 603,
            "title": "The Matrix",
            "original_title": "The Matrix",
            "overview": "Set in the 22nd century, The Matrix tells the story of a computer hacker...",
            "poster_path": "/f89U3ADr1oiB1s9GkdPOEpXUk5H.jpg",
            "release_date": "1999-03-30",
            "vote_average": 8.2,
        },
        {
            "id": 604,
            "title": "The Matrix Reloaded",
            "original_title": "The Matrix Reloaded",
            "overview": "Six months after the events depicted in The Matrix...",
            "poster_path": "/9TGHDvWrqKBzwDxDodHYXEmOE6J.jpg",
            "release_date": "2003-05-15",
            "vote_average": 7.0,
        },
    ],
    "total_pages": 1,
    "total_results": 2,
}

TMDB_SEARCH_EMPTY_RESPONSE = {
    "page": 1,
    "results": [],
    "total_pages": 0,
    "total_results": 0,
}

# GET /movie/603
TMDB_MOVIE_DETAILS_RESPONSE = {
    "id": 603,
    "title": "The Matrix",
    "original_title": "The Matrix",
    "overview": "Set in the 22nd century, The Matrix tells the story of a computer hacker...",
    "poster_path": "/f89U3ADr1oiB1s9GkdPOEpXUk5H.jpg",
    "release_date": "1999-03-30",
    "runtime": 136,
    "vote_average": 8.2,
    "vote_count": 24000,
}

# GET /search/tv?query=Breaking Bad
TMDB_SEARCH_TV_RESPONSE = {
    "page": 1,
    "results": [
        {
            "id": 1396,
            "name": "Breaking Bad",
            "original_name": "Breaking Bad",
            "overview": "Walter White, a New Mexico chemistry teacher...",
            "poster_path": "/ggFHVNu6YYI5L9pCfOacjizRGt.jpg",
            "first_air_date": "2008-01-20",
            "vote_average": 8.9,
        },
    ],
    "total_pages": 1,
    "total_results": 1,
}

# GET /tv/1396 (trimmed to two seasons plus specials)
TMDB_TV_DETAILS_RESPONSE = {
    "id": 1396,
    "name": "Breaking Bad",
    "original_name": "Breaking Bad",
    "overview": "Walter White, a New Mexico chemistry teacher...",
    "poster_path": "/ggFHVNu6YYI5L9pCfOacjizRGt.jpg",
    "first_air_date": "2008-01-20",
    "vote_average": 8.9,
    "seasons": [
        {"season_number": 0, "name": "Specials", "episode_count": 9},
        {"season_number": 1, "name": "Season 1", "episode_count": 2},
        {"season_number": 2, "name": "Season 2", "episode_count": 1},
    ],
}

# GET /tv/1396/season/1
TMDB_SEASON_1_RESPONSE = {
    "id": 3572,
    "season_number": 1,
    "name": "Season 1",
    "overview": "High school chemistry teacher Walter White's life is suddenly transformed...",
    "air_date": "2008-01-20",
    "poster_path": "/1BP4xYv9ZG4ZVHkL7ocOziBbSYH.jpg",
    "episodes": [
        {
            "episode_number": 1,
            "season_number": 1,
            "name": "Pilot",
            "overview": "When an unassuming high school chemistry teacher discovers...",
            "air_date": "2008-01-20",
            "vote_average": 8.4,
            "still_path": "/ydlY3iPfeOAvu8gVqrxPoMvzNCn.jpg",
        },
        {
            "episode_number": 2,
            "season_number": 1,
            "name": "Cat's in the Bag...",
            "overview": "Walt and Jesse attempt to tie up loose ends...",
            "air_date": "2008-01-27",
            "vote_average": 8.2,
            "still_path": "/tjDNvbokPLtEnpFyFPyXMOd6Zr1.jpg",
        },
    ],
}

# GET /tv/1396/season/2
TMDB_SEASON_2_RESPONSE = {
    "id": 3573,
    "season_number": 2,
    "name": "Season 2",
    "overview": "Walt must deal with the chain reaction of his choice...",
    "air_date": "2009-03-08",
    "poster_path": "/e3oGYpoTUhOFK0BJfloru5ZmGV.jpg",
    "episodes": [
        {
            "episode_number": 1,
            "season_number": 2,
            "name": "Seven Thirty-Seven",
            "overview": "Walt and Jesse realize how dire their situation is...",
            "air_date": "2009-03-08",
            "vote_average": 8.1,
            "still_path": "/fvW6JjmhMVuR5NwtLGxDPvvK1rn.jpg",
        },
    ],
}
