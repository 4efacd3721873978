import os
import threading

import mock
import psutil
import pytest

from cgview.cgroup import Controller
from cgview.error import (CGVIEW_ERROR_ATTRIBUTE_UNREADABLE,
                          AttributeUnreadableError)


@pytest.fixture
def memcg(fake_sys):
    return fake_sys.make_cgroup('memory', '/user.slice/u.service', {
        'memory.usage_in_bytes': '1024\n',
        'memory.stat': 'cache 4096\nrss 8192\n',
        'cgroup.procs': '1\n2\n',
    })


def test_controller_seeds_cache_with_files(memcg):
    (memcg / 'child').mkdir()

    cont = Controller(memcg)

    assert cont.attributes() == [b'cgroup.procs', b'memory.stat',
                                 b'memory.usage_in_bytes']


def test_controller_unlistable_dir(fake_sys):
    with pytest.raises(OSError):
        Controller(fake_sys.cgroupfs / 'nonexistent')


def test_controller_get(memcg):
    cont = Controller(memcg)

    assert cont.get(b'memory.usage_in_bytes') == '1024\n'
    assert cont.get('memory.usage_in_bytes') == '1024\n'


def test_controller_get_reads_current_contents(memcg):
    cont = Controller(memcg)
    (memcg / 'memory.usage_in_bytes').write_text('2048\n')

    assert cont.get(b'memory.usage_in_bytes') == '2048\n'


def test_controller_get_unknown_attribute(memcg):
    cont = Controller(memcg)

    assert cont.get(b'does.not.exist') is None
    assert cont.get(b'does.not.exist') is None
    assert b'does.not.exist' in cont.attributes()


def test_controller_get_attribute_created_later(memcg):
    cont = Controller(memcg)
    (memcg / 'memory.failcnt').write_text('0\n')

    assert cont.get(b'memory.failcnt') == '0\n'


def test_controller_get_directory_is_absent(memcg):
    (memcg / 'child').mkdir()
    cont = Controller(memcg)

    assert cont.get(b'child') is None


def test_controller_get_does_not_relist(memcg):
    cont = Controller(memcg)

    with mock.patch('os.scandir', side_effect=AssertionError):
        assert cont.get(b'memory.usage_in_bytes') == '1024\n'
        assert cont.get(b'memory.usage_in_bytes') == '1024\n'
        assert cont.get(b'memory.failcnt') is None


def test_controller_get_read_fails(memcg):
    cont = Controller(memcg)

    with mock.patch('cgview.cgroup.controller.open', create=True,
                    side_effect=OSError(5, 'Input/output error')):
        with pytest.raises(AttributeUnreadableError) as excinfo:
            cont.get(b'memory.usage_in_bytes')

    err = excinfo.value
    assert err.errno == CGVIEW_ERROR_ATTRIBUTE_UNREADABLE
    assert err.path == os.path.join(cont.path, b'memory.usage_in_bytes')
    assert 'Input/output error' in str(err)

    # the view is still usable
    assert cont.get(b'memory.usage_in_bytes') == '1024\n'


def test_controller_get_after_dir_removed(memcg):
    cont = Controller(memcg)
    for f in memcg.iterdir():
        f.unlink()
    memcg.rmdir()

    assert cont.get(b'memory.usage_in_bytes') is None


def test_controller_get_int(memcg):
    cont = Controller(memcg)

    assert cont.get_int(b'memory.usage_in_bytes') == 1024
    assert cont.get_int(b'memory.limit_in_bytes') is None


def test_controller_get_int_bad_value(memcg):
    (memcg / 'memory.oom_control').write_text('oom_kill_disable 0\n')
    cont = Controller(memcg)

    with pytest.raises(ValueError):
        cont.get_int(b'memory.oom_control')


def test_controller_get_kv(memcg):
    cont = Controller(memcg)

    assert cont.get_kv(b'memory.stat') == {'cache': 4096, 'rss': 8192}
    assert cont.get_kv(b'memory.numa_stat') is None


def test_controller_get_range_list(fake_sys):
    d = fake_sys.make_cgroup('cpuset', '/', {'cpuset.cpus': '0-3,8\n',
                                             'cpuset.mems': '\n'})
    cont = Controller(d)

    assert cont.get_range_list(b'cpuset.cpus') == [0, 1, 2, 3, 8]
    assert cont.get_range_list(b'cpuset.mems') == []
    assert cont.get_range_list(b'cpuset.effective_cpus') is None


def test_controller_pids(memcg):
    cont = Controller(memcg)

    assert cont.pids() == [1, 2]


def test_controller_pids_from_tasks(fake_sys):
    d = fake_sys.make_cgroup('cpu', '/old', {'tasks': '10\n11\n'})

    assert Controller(d).pids() == [10, 11]


def test_controller_pids_none(fake_sys):
    d = fake_sys.make_cgroup('cpu', '/empty')

    assert Controller(d).pids() is None
    assert Controller(d).processes() == []


@mock.patch('psutil.Process')
def test_controller_processes_skips_exited(mock_process, memcg):
    proc = mock.MagicMock()
    mock_process.side_effect = [psutil.NoSuchProcess(1, msg='fake_error'),
                                proc]

    procs = Controller(memcg).processes()

    assert procs == [proc]
    mock_process.assert_has_calls([mock.call(1), mock.call(2)])


def test_controller_concurrent_get(memcg):
    cont = Controller(memcg)
    results = []

    def worker(i):
        results.append(cont.get(b'attr%d' % (i % 4)))

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(16)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert results == [None] * 16
    assert [a for a in cont.attributes() if a.startswith(b'attr')] == \
        [b'attr0', b'attr1', b'attr2', b'attr3']


def test_controller_get_non_utf8_contents(memcg):
    (memcg / 'memory.weird').write_bytes(b'\xff\xfe\n')
    cont = Controller(memcg)

    with pytest.raises(AttributeUnreadableError) as excinfo:
        cont.get(b'memory.weird')

    assert isinstance(excinfo.value.cause, UnicodeDecodeError)
    assert 'memory.weird' in str(excinfo.value)
    assert cont.get(b'memory.usage_in_bytes') == '1024\n'


@pytest.mark.parametrize('key', [b'/etc/passwd', b'child/memory.stat',
                                 '../memory.stat'])
def test_controller_get_rejects_paths(memcg, key):
    cont = Controller(memcg)

    with pytest.raises(ValueError):
        cont.get(key)
