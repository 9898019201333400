"""Implementation of the datasets API, including the dataset files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from ufdl_client.actions.action import Action

if TYPE_CHECKING:
    from os import PathLike

    import requests

LOGGER = logging.getLogger(__name__)

"""The archive formats a whole dataset can be downloaded as, by file suffix."""
DOWNLOAD_FILETYPES = {".zip": "zip", ".tar.gz": "tar.gz"}


def filetype_for_output(output: PathLike[str] | str) -> str:
    """Returns the download filetype for the output file name.

    Raises:
        ValueError: if the output is neither a .zip nor a .tar.gz file
    """
    name = Path(output).name
    for suffix, filetype in DOWNLOAD_FILETYPES.items():
        if name.endswith(suffix):
            return filetype
    msg = f"Only zip or tar.gz available for download: {output!s}"
    raise ValueError(msg)


class Datasets(Action):
    """For managing the datasets."""

    name = "Datasets"
    path = "/v1/core/datasets/"

    def api_list(self, **kwargs) -> requests.Response:
        """Lists the datasets.

        Args:
            **kwargs: gets passed to :py:meth:`Action.api_request`
        """
        return self.api_request("GET", **kwargs)

    def list(self) -> list[dict]:
        """Returns all datasets."""
        LOGGER.info("listing datasets")
        return self.api_list().json()

    def api_load(self, pk: int, **kwargs) -> requests.Response:
        """Loads a dataset by primary key.

        Args:
            pk: the primary key of the dataset
            **kwargs: gets passed to :py:meth:`Action.api_request`
        """
        return self.api_request("GET", f"{self.check_pk(pk)}", **kwargs)

    def load(self, pk: int) -> dict:
        """Returns the dataset with the primary key."""
        LOGGER.info("loading dataset with id: %s", pk)
        return self.api_load(pk).json()

    def load_by_name(self, name: str) -> dict | None:
        """Returns the first dataset with the name, None if there is none."""
        LOGGER.info("loading dataset with name: %s", name)
        for dataset in self.list():
            if dataset.get("name") == name:
                return dataset
        return None

    def create(
        self, name: str, version: int, project: int, licence: str, is_public: bool = False, tags: str = ""
    ) -> dict:
        """Creates a dataset and returns it.

        Args:
            name: the name of the dataset
            version: the version of the dataset
            project: the primary key of the project the dataset belongs to
            licence: the licence of the dataset
            is_public: whether the dataset is public
            tags: the tags of the dataset, comma separated
        """
        LOGGER.info("creating dataset: %s", name)
        return self.api_request(
            "POST",
            json={
                "name": name,
                "version": version,
                "project": project,
                "licence": licence,
                "is_public": is_public,
                "tags": tags,
            },
        ).json()

    def api_add_file(self, pk: int, name: str, content: bytes, **kwargs) -> requests.Response:
        """Uploads a file to the dataset.

        Args:
            pk: the primary key of the dataset
            name: the file name in the dataset
            content: the file content
            **kwargs: gets passed to :py:meth:`Action.api_request`
        """
        return self.api_request(
            "POST",
            f"{self.check_pk(pk)}/files/{name}",
            data=content,
            headers={"Content-Type": "application/octet-stream"},
            **kwargs,
        )

    def add_file(self, pk: int, file: PathLike[str] | str, name: str | None = None) -> None:
        """Uploads the local file to the dataset.

        Args:
            pk: the primary key of the dataset
            file: the local file
            name: the file name in the dataset, defaults to the name of the local file
        """
        path = Path(file)
        LOGGER.info("adding file %s to dataset %s", path, pk)
        # read into memory, so the body can be sent again after a token refresh
        self.api_add_file(pk, name or path.name, path.read_bytes())

    def get_file(self, pk: int, name: str, output: PathLike[str] | str) -> None:
        """Downloads a file of the dataset.

        Args:
            pk: the primary key of the dataset
            name: the file name in the dataset
            output: the local file to write to
        """
        LOGGER.info("getting file %s from dataset %s", name, pk)
        self.download(f"{self.check_pk(pk)}/files/{name}", output)

    def delete_file(self, pk: int, name: str) -> None:
        """Deletes a file from the dataset.

        Args:
            pk: the primary key of the dataset
            name: the file name in the dataset
        """
        LOGGER.info("deleting file %s from dataset %s", name, pk)
        self.api_request("DELETE", f"{self.check_pk(pk)}/files/{name}")

    def download(self, pk_or_path: int | str, output: PathLike[str] | str, **kwargs) -> requests.Response:
        """Downloads the whole dataset as archive, or streams any api path into a file.

        Args:
            pk_or_path: the primary key of the dataset to download it as zip or tar.gz, depending
                on the name of the output file, or an api path below :py:attr:`path`
            output: the local file to write to
            **kwargs: gets passed to :py:meth:`Action.download`

        Raises:
            ValueError: if a dataset is downloaded to a file that is neither .zip nor .tar.gz
        """
        if isinstance(pk_or_path, str):
            return super().download(pk_or_path, output, **kwargs)
        filetype = filetype_for_output(output)
        LOGGER.info("downloading dataset with id: %s", pk_or_path)
        return super().download(f"{self.check_pk(pk_or_path)}/download", output, params={"filetype": filetype})

    def delete(self, pk: int) -> None:
        """Deletes the dataset with the primary key."""
        LOGGER.info("deleting dataset with PK: %s", pk)
        self.api_request("DELETE", f"{self.check_pk(pk)}/")
