import os
import shutil
import tempfile
import unittest

from ffnet.core.logger import TrainingLogger, format_progress


class TestTrainingLogger(unittest.TestCase):

    def setUp(self):
        self.tmp_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.tmp_dir)

    def test_format_progress(self):
        self.assertEqual(format_progress("step", 3, 125), "(003 / 125) step")
        self.assertEqual(format_progress("step", 1, 1), "(1 / 1) step")

    def test_progress_written_to_file(self):
        filename = os.path.join(self.tmp_dir, 'log.txt')
        logger = TrainingLogger(filename=filename, stdout=False)

        logger.progress("Applied update", 2, 10)
        logger.info("done")
        logger.close()

        with open(filename) as f:
            contents = f.read()

        self.assertIn("(02 / 10) Applied update", contents)
        self.assertIn("INFO", contents)
        self.assertIn("done", contents)

    def test_network_sgd_with_training_logger(self):
        from ffnet.algebra import Matrix
        from ffnet.nn.activation import ReLU
        from ffnet.nn.network import Network

        filename = os.path.join(self.tmp_dir, 'train.txt')
        logger = TrainingLogger(filename=filename, stdout=False)

        network = Network([2, 1], ReLU())
        network.sgd(Matrix.zeros(w=2, h=3), Matrix.zeros(w=1, h=3),
                    batch_size=2, learning_rate=0.1, training_logger=logger)
        logger.close()

        with open(filename) as f:
            contents = f.read()

        self.assertIn("Starting SGD over 3 examples", contents)
        self.assertIn("(2 / 2) Applied update from 1 examples", contents)


if __name__ == '__main__':
    unittest.main()
