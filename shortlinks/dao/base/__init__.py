from shortlinks.dao.base.url_record_base_dao import UrlRecordBaseDAO
from shortlinks.dao.base.click_event_base_dao import ClickEventBaseDAO


__all__ = [
    'UrlRecordBaseDAO',
    'ClickEventBaseDAO',
]
