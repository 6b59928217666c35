"""Built-in category table."""

# Categories are installed in `order`: catch-alls first, so that the specific
# categories installed after them win where both match.
BUILTIN_CATEGORIES_YAML = r"""
categories:
  hidden:
    color: "#6c6c6c"
    regexps: ['\..*']

  omit:
    color: "#808080"
    extensions: [tmp, TMP, bak, BAK, swp, swo, log, aux, out, o, obj, elc, pyc, pyo,
                 class, lock, part, crdownload]

  omit2:
    color: "#8a8a8a"
    filenames: [__pycache__, .DS_Store, Thumbs.db, desktop.ini]
    extensions: [orig, rej, old]
    regexps: ['.*~', '#.*#', '\.#.*']

  vc:
    color: "#af87d7"
    regexps: ['\.git(?:ignore|attributes|modules|keep)?', '\.hg(?:ignore)?', '\.svn', 'CVS', '\.bzr']

  document:
    color: "#c678dd"
    extensions: [pdf, PDF, doc, docx, docm, odt, ods, odp, ppt, pptx, xls, xlsx, rtf, epub,
                 djvu, ps, chm, mobi]

  plain:
    color: "#d7d7af"
    extensions: [txt, TXT, text, md, markdown, org, rst, tex, nfo, info]

  common:
    color: "bold #ffd75f"
    regexps: [Makefile, makefile, GNUmakefile, 'README.*', 'LICEN[CS]E.*', COPYING,
              'CHANGE(?:LOG|S).*', ChangeLog, 'INSTALL.*', AUTHORS, NEWS, Dockerfile,
              'CMakeLists\.txt', Rakefile, Gemfile, configure, 'setup\.py', 'pyproject\.toml',
              'package\.json', 'Cargo\.toml', 'go\.mod']

  markup:
    color: "#5fafd7"
    extensions: [html, htm, xhtml, xml, xsd, xsl, xslt, css, scss, sass, less, json, yaml,
                 yml, toml, ini, conf, cfg, rss, wsdl, mustache]

  compress:
    color: "#ff5f5f"
    extensions: [7z, zip, ZIP, rar, RAR, tar, gz, GZ, tgz, bz2, tbz2, xz, txz, lz, lzma,
                 zst, z, Z, cab, arj, lzh]

  disk:
    color: "#d75f5f"
    extensions: [iso, ISO, img, dmg, vmdk, vdi, qcow, qcow2, vhd, nrg, toast]

  package:
    color: "#ff875f"
    extensions: [deb, rpm, apk, jar, war, ear, whl, egg, gem, snap, flatpak, pkg, xpi, vsix]

  source:
    color: "#87d75f"
    extensions: [c, h, cc, cpp, cxx, c++, hh, hpp, hxx, go, py, pyi, rs, rb, pl, pm, java,
                 kt, scala, clj, cljs, el, lisp, scm, hs, ml, mli, erl, ex, exs, js, mjs,
                 tsx, jsx, lua, php, swift, m, cs, sh, bash, zsh, fish, awk, sed, sql, r, R,
                 jl, dart, asm, s, S, f, f90, vim]

  program:
    color: "#5fd787"
    extensions: [exe, EXE, com, COM, msi, MSI, bat, BAT, cmd, CMD, app, run, AppImage]

  database:
    color: "#8787ff"
    extensions: [db, sqlite, sqlite3, mdb, accdb, dbf, csv, tsv, parquet, feather, h5,
                 hdf5, nc]

  font:
    color: "#87afaf"
    extensions: [ttf, otf, woff, woff2, fon, fnt, pfb, pfm, afm, bdf, pcf]

  encrypt:
    color: "#ffd700"
    extensions: [gpg, pgp, asc, sig, pem, crt, cer, key, p12, pfx, kdbx, enc]

  audio:
    color: "#00afaf"
    extensions: [mp3, MP3, wav, WAV, flac, FLAC, ogg, oga, opus, aac, m4a, wma, ape, aiff,
                 mid, midi, mka, ra]

  video:
    color: "#d787d7"
    extensions: [mp4, MP4, mkv, avi, AVI, mov, MOV, wmv, flv, webm, mpeg, mpg, m4v, 3gp,
                 rm, rmvb, vob]

  image:
    color: "#ff87af"
    extensions: [png, PNG, jpg, JPG, jpeg, JPEG, gif, GIF, bmp, tif, tiff, ico, svg, webp,
                 psd, xcf, eps, heic, raw, cr2, nef, ppm, pgm, xpm]

  link:
    color: "italic #5fd7ff"
    regexp: '^[ *DCI!]\s*l'

  execute:
    color: "bold #d7ff5f"
    regexp: '^[ *DCI!] -(?:[r-][w-]-){,2}[r-][w-]x'

order: [hidden, omit, omit2, vc, document, plain, common, markup, compress, disk, package,
        source, program, database, font, encrypt, audio, video, image, link, execute]
"""

DEFAULT_KEYBINDINGS = {
    "q": "quit",
    "g": "revert",
    "(": "toggle-details",
    "R": "rename",
    "n": "next-line",
    "p": "previous-line",
    "down": "next-line",
    "up": "previous-line",
}

DEFAULT_CONFIG_YAML = """
config:
  color: true
  listing_switches: "-al"

themes:
  mono:
    categories:
      hidden: dim
      omit: dim
      omit2: dim
      common: bold
      link: italic
      execute: bold underline
"""
