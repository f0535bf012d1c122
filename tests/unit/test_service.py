"""Unit tests for PasteService

Test coverage includes:

1. Creation
   - Returns id, creation time and expiry; stores view_count = 0.
   - Invalid input raises ValidationError before any store interaction.
   - Store failures (incl. Redis server errors) raise BackendUnavailableError.
   - 10,000 generated ids are (almost surely) distinct.

2. Access
   - Content is returned byte-for-byte.
   - remaining_views counts down; the last view deletes the paste.
   - Time-expired pastes are NotFound (59 s served, 61 s not), and deleted.
   - Malformed ids are NotFound without reaching the store.
   - Uppercase ids address the same paste.

3. Failure handling
   - A failed view count write-back still delivers the content.
   - A failed retire-delete doesn't fail the access.
   - The view count write-back increments the stored record.
   - Store failures (incl. Redis server errors and corrupt stored values)
     raise BackendUnavailableError.

4. Concurrency
   - With max_views = 1, exactly one of many concurrent readers succeeds.
   - With max_views = N, exactly N of many concurrent readers succeed.
"""

import threading
from datetime import timedelta
from unittest.mock import MagicMock

import pytest
import redis

from ephemeralpaste.service import PasteService
from ephemeralpaste.models import PasteModel
from ephemeralpaste.constants import Backend
from ephemeralpaste.dao.base import PasteBaseDAO
from ephemeralpaste.dao.memory import PasteMemoryDAO
from ephemeralpaste.dao.redis import PasteRedisDAO
from ephemeralpaste.dao.exceptions import DataStoreError
from ephemeralpaste.exceptions import BackendUnavailableError, PasteNotFoundError, ValidationError


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture
def dao(clock):
    return PasteMemoryDAO(clock=clock)


@pytest.fixture
def service(dao, clock):
    return PasteService(dao, clock=clock)


@pytest.fixture
def mock_dao():
    dao = MagicMock(spec=PasteBaseDAO)
    dao.backend = Backend.REDIS
    dao.lock.return_value.__enter__.return_value = None
    dao.lock.return_value.__exit__.return_value = None
    return dao


# -------------------------------
# 1. Creation
# -------------------------------


def test_create(service, dao, t0):
    created = service.create('hello', ttl_seconds=3600, max_views=2)

    assert len(created.id) == 8
    assert created.created_at == t0
    assert created.expires_at == t0 + timedelta(seconds=3600)

    stored = dao.get(created.id)
    assert stored.view_count == 0
    assert stored.max_views == 2
    assert stored.content == 'hello'


def test_create_without_limits(service, dao):
    created = service.create('hello')
    assert created.expires_at is None
    assert dao.get(created.id).max_views is None


def test_create_with_integral_float_limits(service, dao, t0):
    created = service.create('hello', ttl_seconds=60.0, max_views=2.0)

    stored = dao.get(created.id)
    assert created.expires_at == t0 + timedelta(seconds=60)
    assert (stored.ttl_seconds, stored.max_views) == (60, 2)
    assert type(stored.ttl_seconds) is int
    assert type(stored.max_views) is int


def test_create_uses_given_time(service, t0):
    created = service.create('hello', ttl_seconds=60, now=t0 + timedelta(hours=1))
    assert created.expires_at == t0 + timedelta(hours=1, seconds=60)


@pytest.mark.parametrize(
    'kwargs',
    [
        {'content': ''},
        {'content': '   '},
        {'content': 'x' * 1_000_001},
        {'content': 'hello', 'ttl_seconds': 0},
        {'content': 'hello', 'max_views': 0},
    ],
)
def test_create_with_invalid_input_never_touches_store(mock_dao, kwargs):
    service = PasteService(mock_dao)

    with pytest.raises(ValidationError):
        service.create(**kwargs)
    mock_dao.put.assert_not_called()


def test_create_with_store_failure(mock_dao):
    mock_dao.put.side_effect = DataStoreError("Can't connect to Redis at redis.test:6379/0.")

    with pytest.raises(BackendUnavailableError):
        PasteService(mock_dao).create('hello')


def test_generated_ids_are_distinct(service):
    ids = {service.create('x').id for _ in range(10_000)}
    assert len(ids) >= 9_998


# -------------------------------
# 2. Access
# -------------------------------


@pytest.mark.parametrize(
    'content',
    [
        'hello',
        '  leading and trailing whitespace  \n',
        'unicode: ünïcödé, 日本語, 🚀',
        'line\r\nbreaks\nand\ttabs',
        'x' * 1_000_000,
    ],
)
def test_access_returns_content_unchanged(service, content):
    created = service.create(content)
    assert service.access(created.id).content == content


def test_view_limit_scenario(service, dao):
    created = service.create('hello', ttl_seconds=3600, max_views=2)

    first = service.access(created.id)
    assert (first.content, first.remaining_views) == ('hello', 1)

    second = service.access(created.id)
    assert (second.content, second.remaining_views) == ('hello', 0)
    assert dao.get(created.id) is None

    with pytest.raises(PasteNotFoundError):
        service.access(created.id)


def test_unlimited_views(service):
    created = service.create('hello')
    for _ in range(5):
        view = service.access(created.id)
        assert view.remaining_views is None
        assert view.expires_at is None


def test_time_expiry_boundary(service, dao, clock):
    created = service.create('hello', ttl_seconds=60)

    clock.advance(59)
    view = service.access(created.id)
    assert view.content == 'hello'
    assert view.expires_at == created.expires_at

    clock.advance(2)
    with pytest.raises(PasteNotFoundError):
        service.access(created.id)
    with pytest.raises(PasteNotFoundError):
        service.access(created.id)
    assert len(dao) == 0


def test_expiry_uses_reference_time(service, dao, t0):
    """Ensure the caller-supplied time decides expiry, not the store's clock."""
    created = service.create('hello', ttl_seconds=60, now=t0)

    with pytest.raises(PasteNotFoundError):
        service.access(created.id, now=t0 + timedelta(seconds=60))
    assert dao.get(created.id) is None


def test_view_limit_already_exceeded_is_retired(service, dao, t0):
    dao.put(PasteModel(id='abc12345', content='hello', created_at=t0, max_views=1, view_count=1))

    with pytest.raises(PasteNotFoundError):
        service.access('abc12345')
    assert dao.get('abc12345') is None


def test_unknown_id(service):
    with pytest.raises(PasteNotFoundError, match='Paste not found.'):
        service.access('abc12345')


@pytest.mark.parametrize('paste_id', ['', 'abc', 'abc123456', 'zzzzzzzz', '../etc/p', 'abc 1234', None, 12345678])
def test_malformed_id_never_reaches_store(mock_dao, paste_id):
    with pytest.raises(PasteNotFoundError):
        PasteService(mock_dao).access(paste_id)

    mock_dao.lock.assert_not_called()
    mock_dao.get.assert_not_called()


def test_uppercase_id(service):
    created = service.create('hello')
    assert service.access(created.id.upper()).content == 'hello'


# -------------------------------
# 3. Failure handling
# -------------------------------


def test_failed_write_back_still_delivers(mock_dao, t0, caplog):
    mock_dao.get.return_value = PasteModel(id='abc12345', content='hello', created_at=t0, max_views=3)
    mock_dao.update.side_effect = DataStoreError('write failed')

    view = PasteService(mock_dao).access('abc12345', now=t0)

    assert view.content == 'hello'
    assert view.remaining_views == 2
    mock_dao.delete.assert_not_called()
    assert 'Failed to persist view count' in caplog.text


def test_failed_write_back_on_last_view_still_deletes(mock_dao, t0):
    mock_dao.get.return_value = PasteModel(id='abc12345', content='hello', created_at=t0, max_views=1)
    mock_dao.update.side_effect = DataStoreError('write failed')

    view = PasteService(mock_dao).access('abc12345', now=t0)

    assert view.remaining_views == 0
    mock_dao.delete.assert_called_once_with('abc12345')


def test_failed_retire_still_delivers(mock_dao, t0, caplog):
    mock_dao.get.return_value = PasteModel(id='abc12345', content='hello', created_at=t0, max_views=1)
    mock_dao.update.return_value = True
    mock_dao.delete.side_effect = DataStoreError('delete failed')

    view = PasteService(mock_dao).access('abc12345', now=t0)

    assert view.content == 'hello'
    assert 'Failed to delete retired paste' in caplog.text


def test_access_with_store_failure(mock_dao):
    mock_dao.get.side_effect = DataStoreError("Can't connect to Redis at redis.test:6379/0.")

    with pytest.raises(BackendUnavailableError):
        PasteService(mock_dao).access('abc12345')


def test_access_with_lock_failure(mock_dao):
    mock_dao.lock.side_effect = DataStoreError("Timed out waiting for lock on paste 'abc12345'.")

    with pytest.raises(BackendUnavailableError):
        PasteService(mock_dao).access('abc12345')
    mock_dao.get.assert_not_called()


def test_close(mock_dao):
    with PasteService(mock_dao) as service:
        assert service.dao is mock_dao
    mock_dao.close.assert_called_once()


def test_view_count_increments_stored_record(mock_dao, t0):
    """Ensure the write-back builds on the record the store holds at commit time."""
    mock_dao.get.return_value = PasteModel(id='abc12345', content='hello', created_at=t0, max_views=10, view_count=1)
    mock_dao.update.return_value = True

    PasteService(mock_dao).access('abc12345', now=t0)

    paste_id, mutator = mock_dao.update.call_args.args
    assert paste_id == 'abc12345'
    # Another reader committed in between (e.g. the lock expired)
    concurrently_updated = PasteModel(id='abc12345', content='hello', created_at=t0, max_views=10, view_count=2)
    assert mutator(concurrently_updated).view_count == 3


@pytest.fixture
def redis_client():
    client = MagicMock(spec=redis.client.Pipeline)
    client.connection_pool = MagicMock(
        spec=redis.ConnectionPool,
        connection_kwargs={'host': 'redis.test', 'port': 6379, 'db': 0},
    )
    client.lock.return_value.acquire.return_value = True
    return client


@pytest.mark.parametrize(
    'error',
    [
        redis.exceptions.ResponseError("OOM command not allowed when used memory > 'maxmemory'."),
        redis.exceptions.ReadOnlyError("You can't write against a read only replica."),
        redis.exceptions.ConnectionError('Connection error'),
    ],
)
def test_create_with_redis_error(redis_client, error):
    redis_client.set.side_effect = error

    with pytest.raises(BackendUnavailableError, match='Failed to create paste.'):
        PasteService(PasteRedisDAO(redis_client=redis_client)).create('hello')


@pytest.mark.parametrize(
    'error',
    [
        redis.exceptions.ResponseError('LOADING Redis is loading the dataset in memory'),
        redis.exceptions.TimeoutError('Timeout'),
    ],
)
def test_access_with_redis_error(redis_client, error):
    redis_client.get.side_effect = error

    with pytest.raises(BackendUnavailableError, match='Failed to access paste.'):
        PasteService(PasteRedisDAO(redis_client=redis_client)).access('abc12345')
    redis_client.lock.return_value.release.assert_called_once()


@pytest.mark.parametrize('blob', ['not json', '{"id": "abc12345"}'])
def test_access_with_corrupt_stored_value(redis_client, blob):
    redis_client.get.return_value = blob

    with pytest.raises(BackendUnavailableError, match='Failed to access paste.'):
        PasteService(PasteRedisDAO(redis_client=redis_client)).access('abc12345')


def test_healthcheck(mock_dao):
    mock_dao.healthcheck.return_value = False
    assert PasteService(mock_dao).healthcheck() is False


# -------------------------------
# 4. Concurrency
# -------------------------------


def _race(service: PasteService, paste_id: str, readers: int) -> tuple[list, list]:
    barrier = threading.Barrier(readers)
    served, not_found = [], []
    results_guard = threading.Lock()

    def reader():
        barrier.wait()
        try:
            view = service.access(paste_id)
        except PasteNotFoundError:
            with results_guard:
                not_found.append(paste_id)
        else:
            with results_guard:
                served.append(view)

    threads = [threading.Thread(target=reader) for _ in range(readers)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    return served, not_found


def test_single_view_race(service, dao):
    created = service.create('secret', max_views=1)

    served, not_found = _race(service, created.id, readers=16)

    assert len(served) == 1
    assert served[0].content == 'secret'
    assert served[0].remaining_views == 0
    assert len(not_found) == 15
    assert dao.get(created.id) is None


def test_multi_view_race(service):
    created = service.create('secret', max_views=5)

    served, not_found = _race(service, created.id, readers=20)

    assert len(served) == 5
    assert sorted(view.remaining_views for view in served) == [0, 1, 2, 3, 4]
    assert len(not_found) == 15
