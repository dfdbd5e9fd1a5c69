"""Tests for the command line interface."""
from unittest.mock import MagicMock, patch

import pytest
import typer
from typer.testing import CliRunner

from dbxpy import Account, Credentials, Entry, TransportError
from dbxpy.cli.main import app, parse_range

runner = CliRunner()


@pytest.fixture
def dropbox():
    """Mock client returned by get_client()."""
    client = MagicMock()
    client.__enter__.return_value = client
    with patch('dbxpy.cli.main.get_client', return_value=client):
        yield client


class TestCli:
    """Test suite for CLI commands."""
    
    def test_account(self, dropbox):
        """Test the account command."""
        dropbox.account_info.return_value = Account(
            uid=174, display_name='John Q. User', country='US',
            quota=1000, quota_normal=200, quota_shared=50
        )
        
        result = runner.invoke(app, ['account'])
        
        assert result.exit_code == 0
        assert 'John Q. User' in result.output
        assert '25.0% used' in result.output
    
    def test_ls(self, dropbox):
        """Test listing a folder."""
        folder = Entry(path='/Public', is_dir=True, contents=(
            Entry(path='/Public/a.txt', bytes=10),
            Entry(path='/Public/sub', is_dir=True),
        ))
        dropbox.metadata.return_value.with_list.return_value.as_entry.return_value = folder
        
        result = runner.invoke(app, ['ls', '/Public'])
        
        assert result.exit_code == 0
        assert 'a.txt' in result.output
        assert 'sub/' in result.output
        dropbox.metadata.assert_called_once_with('/Public')
    
    def test_ls_root(self, dropbox):
        """Test '/' lists the root folder."""
        dropbox.metadata.return_value.with_list.return_value.as_entry.return_value = Entry(path='/', is_dir=True)
        
        runner.invoke(app, ['ls'])
        
        dropbox.metadata.assert_called_once_with('')
    
    def test_get_with_range(self, dropbox, tmp_path):
        """Test downloading a byte range."""
        download = dropbox.files_get.return_value
        download.with_range.return_value.to_file.return_value = 10
        target = tmp_path / 'head.bin'
        
        result = runner.invoke(app, ['get', '/a.bin', '-o', str(target), '--range', '0-9'])
        
        assert result.exit_code == 0
        download.with_range.assert_called_once_with(0, 9)
        download.with_range.return_value.to_file.assert_called_once_with(target)
    
    def test_get_invalid_range(self, dropbox):
        """Test a malformed range option."""
        result = runner.invoke(app, ['get', '/a.bin', '--range', 'abc'])
        
        assert result.exit_code != 0
    
    def test_put_simple(self, dropbox, tmp_path):
        """Test a simple upload."""
        source = tmp_path / 'a.txt'
        source.write_text('hello')
        upload = dropbox.files_put.return_value.with_parent_rev.return_value
        upload.from_file.return_value = Entry(path='/a.txt', rev='r1', bytes=5)
        
        result = runner.invoke(app, ['put', str(source), '/a.txt'])
        
        assert result.exit_code == 0
        assert 'r1' in result.output
        upload.from_file.assert_called_once_with(source)
    
    def test_put_too_large_for_simple(self, dropbox, tmp_path):
        """Test files over the single request limit need --chunked."""
        source = tmp_path / 'big.bin'
        source.write_bytes(b'x' * 10)

        with patch('dbxpy.core.upload.MAX_SIMPLE_UPLOAD_SIZE', 5):
            result = runner.invoke(app, ['put', str(source), '/big.bin'])

        assert result.exit_code == 1
        assert '--chunked' in result.output
        dropbox.files_put.assert_not_called()

    def test_put_chunked(self, dropbox, tmp_path):
        """Test a chunked upload with overwrite."""
        source = tmp_path / 'big.bin'
        source.write_bytes(b'x' * 10)
        upload = dropbox.chunked_upload.return_value.with_parent_rev.return_value.with_chunk_size.return_value
        final = upload.with_overwrite.return_value.with_progress.return_value
        final.from_file.return_value = Entry(path='/big.bin', rev='r2', bytes=10)
        
        result = runner.invoke(app, ['put', str(source), '/big.bin', '--chunked', '--chunk-size', '8', '--overwrite'])
        
        assert result.exit_code == 0
        dropbox.chunked_upload.return_value.with_parent_rev.return_value.with_chunk_size.assert_called_once_with(8)
        final.from_file.assert_called_once_with(source)
    
    def test_mkdir(self, dropbox):
        """Test creating a folder."""
        result = runner.invoke(app, ['mkdir', '/new'])
        
        assert result.exit_code == 0
        dropbox.create_folder.assert_called_once_with('/new')
    
    def test_rm_force(self, dropbox):
        """Test deleting without confirmation."""
        result = runner.invoke(app, ['rm', '/old', '-f'])
        
        assert result.exit_code == 0
        dropbox.delete.assert_called_once_with('/old')
    
    def test_rm_declined(self, dropbox):
        """Test declining the confirmation."""
        result = runner.invoke(app, ['rm', '/old'], input='n\n')
        
        assert result.exit_code != 0
        dropbox.delete.assert_not_called()
    
    def test_cp_and_mv(self, dropbox):
        """Test copy and move."""
        dropbox.copy.return_value = Entry(path='/b')
        dropbox.move.return_value = Entry(path='/c')
        
        assert runner.invoke(app, ['cp', '/a', '/b']).exit_code == 0
        assert runner.invoke(app, ['mv', '/b', '/c']).exit_code == 0
        dropbox.copy.assert_called_once_with('/a', '/b')
        dropbox.move.assert_called_once_with('/b', '/c')
    
    def test_service_error(self, dropbox):
        """Test service errors exit with status 1."""
        dropbox.delete.side_effect = TransportError.from_status('POST x', 404, 'Not Found')
        
        result = runner.invoke(app, ['rm', '/missing', '-f'])
        
        assert result.exit_code == 1
        assert '404' in result.output


class TestAuthorizeCommand:
    """Test suite for the authorize command."""
    
    def test_authorize(self, tmp_path):
        """Test the flow prints the token credentials."""
        config = tmp_path / 'dropbox.properties'
        config.write_text('dropbox.app.key=k\ndropbox.app.secret=s\n')
        client = MagicMock()
        client.__enter__.return_value = client
        client.authorization_url.return_value = 'https://api.dropbox.com/1/oauth/authorize?oauth_token=t'
        client.authorize.return_value = Credentials('tok', 'tok-secret')
        
        with patch('dbxpy.DropboxClient', return_value=client):
            result = runner.invoke(app, ['authorize', '-c', str(config)], input='y\n')
        
        assert result.exit_code == 0
        assert 'dropbox.access.key=tok' in result.output
        assert 'dropbox.access.secret=tok-secret' in result.output
    
    def test_missing_app_credentials(self, tmp_path):
        """Test a configuration without application credentials."""
        config = tmp_path / 'dropbox.properties'
        config.write_text('dropbox.language=en\n')
        
        result = runner.invoke(app, ['authorize', '-c', str(config)])
        
        assert result.exit_code == 1


class TestParseRange:
    """Test suite for parse_range."""
    
    def test_valid(self):
        assert parse_range('10-20') == (10, 20)
    
    @pytest.mark.parametrize('value', ['10', 'a-b', ''])
    def test_invalid(self, value):
        with pytest.raises(typer.BadParameter):
            parse_range(value)
