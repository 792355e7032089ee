from webcommon.repositories.notice import NoticeRepository
