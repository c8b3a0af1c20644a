import threading

import pytest

from cset import CSet


def grind(buffer_size, data_count):
    fill_count = threading.Semaphore(0)
    empty_count = threading.Semaphore(buffer_size)
    mutex = threading.Lock()
    pipe = CSet()
    sizes = []

    producer_data = list(range(1, data_count + 1))
    consumer_data = []

    def produce():
        while len(producer_data) > 0:
            empty_count.acquire()
            with mutex:
                pipe.add(producer_data.pop())
                sizes.append(len(pipe))
            fill_count.release()

    def consume():
        while len(consumer_data) < data_count:
            fill_count.acquire()
            with mutex:
                consumer_data.append(pipe.pop())
            empty_count.release()

    producer = threading.Thread(target=produce)
    consumer = threading.Thread(target=consume)
    consumer.start()
    producer.start()
    consumer.join(timeout=10)
    producer.join(timeout=10)

    assert not consumer.is_alive()
    assert not producer.is_alive()
    assert len(producer_data) == 0
    assert sorted(consumer_data) == list(range(1, data_count + 1))
    assert pipe.is_empty()
    assert max(sizes) <= buffer_size


@pytest.mark.parametrize(("buffer_size", "data_count"), [(3, 5), (1, 10), (5, 100)])
def test_bounded_buffer(buffer_size, data_count):
    grind(buffer_size, data_count)
