import threading

from pcm.common.io import atomic_write_file, atomic_write_text, read_text
from pcm.map import PointCloudMap


def test_atomic_write_text_thread_safe(tmp_path):
    file = tmp_path / "maps" / "data.pcm"
    text_a = "ref a t v\n" * 50
    text_b = "point b 1 2 3\n" * 50

    def write(text):
        atomic_write_text(file, text)

    t1 = threading.Thread(target=write, args=(text_a,))
    t2 = threading.Thread(target=write, args=(text_b,))
    t1.start()
    t2.start()
    t1.join()
    t2.join()

    assert read_text(file) in (text_a, text_b)
    # only the target remains; temp files were replaced into it
    assert [p.name for p in file.parent.iterdir()] == ["data.pcm"]


def test_read_text_keeps_crlf(tmp_path):
    file = tmp_path / "crlf.pcm"
    file.write_bytes(b"ref a t v\r\npoint a 1 2 3\r\n")
    assert read_text(file) == "ref a t v\r\npoint a 1 2 3\r\n"


def test_atomic_write_file_callback(tmp_path):
    file = tmp_path / "out.bin"
    atomic_write_file(file, lambda tmp: tmp.write_bytes(b"\x00\x01"))
    assert file.read_bytes() == b"\x00\x01"


def test_save_load_round_trip(tmp_path):
    m = PointCloudMap()
    m.add_reference("terrain", "material", "grass")
    m.add_point("terrain", (1, 2, 3))
    path = tmp_path / "nested" / "map.pcm"
    m.save(path)

    assert path.read_bytes().count(b"\r\n") == 0

    again = PointCloudMap()
    report = again.load(path)
    assert report.ok
    assert again.references.entries() == m.references.entries()
    assert list(again.points) == list(m.points)
