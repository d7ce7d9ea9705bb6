from shortlinks.dao.memory.memory_daos import UrlRecordMemoryDAO, ClickEventMemoryDAO


__all__ = [
    'UrlRecordMemoryDAO',
    'ClickEventMemoryDAO',
]
