from datetime import date, datetime, time, timedelta
from typing import List
from sqlalchemy.orm import Session

from streamhub.models.live_channel import LiveChannel, ChannelProgram
from streamhub.repositories.base_repository import BaseRepository

class ChannelRepository(BaseRepository[LiveChannel]):
    """Live channel and EPG reads"""

    def __init__(self, db: Session):
        super().__init__(LiveChannel, db)

    def get_programs_for_day(self, channel_id: int, day: date) -> List[ChannelProgram]:
        """Programs starting on ``day``, earliest first"""
        start = datetime.combine(day, time.min)
        end = start + timedelta(days=1)
        return self.db.query(ChannelProgram).filter(
            ChannelProgram.channel_id == channel_id,
            ChannelProgram.start_time >= start,
            ChannelProgram.start_time < end,
        ).order_by(ChannelProgram.start_time, ChannelProgram.id).all()
