import enum


class ContentType(enum.Enum):
    MOVIE = "movie"
    SERIES = "series"
    EPISODE = "episode"
    LIVE_TV = "live_tv"
    MUSIC = "music"
    SHORT = "short"
    DOCUMENTARY = "documentary"
    TRAILER = "trailer"


class ContentCategory(enum.Enum):
    ENTERTAINMENT = "entertainment"
    NEWS = "news"
    SPORTS = "sports"
    KIDS = "kids"
    MUSIC = "music"
    EDUCATION = "education"
    LIFESTYLE = "lifestyle"
    COMEDY = "comedy"
    DRAMA = "drama"
    ACTION = "action"


class VideoQuality(enum.Enum):
    """Declared from lowest to highest"""
    AUTO = "auto"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    ULTRA = "ultra"


class VideoFormat(enum.Enum):
    MP4 = "mp4"
    HLS = "hls"
    DASH = "dash"
    WEBM = "webm"
    MKV = "mkv"


def enum_values(enum_cls) -> list:
    """Column values for SQLAlchemy Enum(values_callable=...)"""
    return [member.value for member in enum_cls]


class EnumHelper:
    """Enum yardımcı sınıfı"""

    @staticmethod
    def quality_rank(quality: VideoQuality) -> int:
        """Position of a quality, higher is better"""
        return list(VideoQuality).index(quality)

    @staticmethod
    def parse(enum_cls, value):
        """Enum member from its value; raises ValueError when unknown"""
        if isinstance(value, enum_cls):
            return value
        return enum_cls(str(value).strip().lower())
